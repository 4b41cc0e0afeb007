import logging

from photomap_sdk.core.capture import CaptureController
from photomap_sdk.core.errors import (
    CaptureError,
    LocationError,
    PermissionDeniedError,
    PhotoMapError,
    UploadError,
    UploadPreconditionError,
)
from photomap_sdk.core.location import LocationProvider
from photomap_sdk.core.permissions import REQUESTABLE, Notifier, PermissionCoordinator, discard_notice
from photomap_sdk.core.schema import (
    Capability,
    CapturedAsset,
    LocationSample,
    Notice,
    NoticeAction,
    PermissionStatus,
    PhotoRecord,
    SessionState,
    UploadProgress,
    UploadStatus,
)
from photomap_sdk.core.upload import UploadPipeline

logger = logging.getLogger(__name__)

UPLOAD_COMPLETE = Notice(title="Upload Complete!", message="Image and location saved successfully")


class CaptureSession:
    """One camera screen: owns the session state and turns every failure into a notice.

    No ``PhotoMapError`` raised by the components escapes this class; callers read the
    outcome from the return value and from ``state``.
    """

    def __init__(
        self,
        permissions: PermissionCoordinator,
        location: LocationProvider,
        capture: CaptureController,
        pipeline: UploadPipeline,
        notify: Notifier | None = None,
    ):
        self.permissions = permissions
        self.location = location
        self.capture_controller = capture
        self.pipeline = pipeline
        self.notify = notify or discard_notice
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        self._sync()
        return self._state.model_copy(deep=True)

    def _sync(self) -> None:
        self._state.permissions = dict(self.permissions.statuses)
        self._state.location = self.location.last_sample
        self._state.locating = self.location.loading
        self._state.asset = self.capture_controller.asset
        self._state.capture_state = self.capture_controller.state

    def _fail(self, notice: Notice, exc: Exception) -> None:
        self._state.last_error = str(exc)
        logger.info("session_error type=%s reason=%s", type(exc).__name__, exc)
        self.notify(notice)
        self._sync()

    async def start(self) -> SessionState:
        await self.permissions.resolve_all()
        if self.permissions.is_granted(Capability.LOCATION):
            await self.locate()
        self._sync()
        return self.state

    async def locate(self) -> LocationSample | None:
        status = self.permissions.status(Capability.LOCATION)
        if status in REQUESTABLE:
            # ask the OS again; resolve() reports a refusal itself
            status = await self.permissions.resolve(Capability.LOCATION)
            if status != PermissionStatus.GRANTED:
                self._sync()
                return None
        if status == PermissionStatus.BLOCKED:
            self._sync()
            return None
        try:
            sample = await self.location.get_current_location()
        except PermissionDeniedError as exc:
            self._fail(_permission_notice(exc), exc)
            return None
        except LocationError as exc:
            self._fail(
                Notice(title="Error", message=f"Location error: {exc}", actions=(NoticeAction.RETRY,)),
                exc,
            )
            return None
        self._state.last_error = None
        self._sync()
        return sample

    async def retry_location(self) -> LocationSample | None:
        return await self.locate()

    async def capture(self) -> CapturedAsset | None:
        try:
            asset = await self.capture_controller.capture()
        except PermissionDeniedError as exc:
            self._fail(_permission_notice(exc), exc)
            return None
        except CaptureError as exc:
            self._fail(Notice(title="Camera error", message=str(exc)), exc)
            return None
        self._state.upload_status = UploadStatus.IDLE
        self._state.progress = None
        self._sync()
        return asset

    def retake(self) -> None:
        try:
            self.capture_controller.retake()
        except PhotoMapError as exc:
            self._fail(Notice(title="Error", message=str(exc)), exc)
            return
        self._state.upload_status = UploadStatus.IDLE
        self._state.progress = None
        self._sync()

    async def open_settings(self) -> None:
        await self.permissions.open_settings()

    async def save_photo(self) -> PhotoRecord | None:
        try:
            asset = self.capture_controller.begin_upload()
        except PhotoMapError as exc:
            self._fail(Notice(title="Error", message=str(exc)), exc)
            return None

        self._state.upload_status = UploadStatus.UPLOADING
        self._state.progress = None
        self._sync()
        record = None
        try:
            record = await self.pipeline.upload(asset, self.location.last_sample, self._on_progress)
        except UploadPreconditionError as exc:
            self.capture_controller.finish_upload(success=False)
            self._state.upload_status = UploadStatus.IDLE
            self._fail(Notice(title="Error", message=str(exc)), exc)
            return None
        except UploadError as exc:
            self.capture_controller.finish_upload(success=False)
            self._state.upload_status = UploadStatus.FAILED
            self._fail(Notice(title="Upload Failed", message=f"Error: {exc}"), exc)
            return None
        finally:
            if record is None:
                # no-op once an except branch has released the controller
                self.capture_controller.finish_upload(success=False)
                if self._state.upload_status == UploadStatus.UPLOADING:
                    self._state.upload_status = UploadStatus.FAILED

        self.capture_controller.finish_upload(success=True)
        self._state.upload_status = UploadStatus.SUCCEEDED
        self._state.last_error = None
        self._sync()
        self.notify(UPLOAD_COMPLETE)
        return record

    def _on_progress(self, progress: UploadProgress) -> None:
        self._state.progress = progress


def _permission_notice(exc: PermissionDeniedError) -> Notice:
    if exc.blocked:
        return Notice(
            title="Permission Blocked",
            message=f"{exc}. Please enable it in device settings.",
            actions=(NoticeAction.CANCEL, NoticeAction.OPEN_SETTINGS),
        )
    return Notice(title="Permission Denied", message=f"{exc}.", actions=(NoticeAction.RETRY,))
