import logging

from photomap_sdk.core.errors import CaptureError, UploadInProgressError
from photomap_sdk.core.permissions import PermissionCoordinator
from photomap_sdk.core.schema import CameraOptions, Capability, CapturedAsset, CaptureState
from photomap_sdk.devices import Camera

logger = logging.getLogger(__name__)


class CaptureController:
    def __init__(
        self,
        camera: Camera,
        permissions: PermissionCoordinator,
        options: CameraOptions | None = None,
    ):
        self.camera = camera
        self.permissions = permissions
        self.options = options or CameraOptions()
        self.state = CaptureState.IDLE
        self.asset: CapturedAsset | None = None

    async def capture(self) -> CapturedAsset | None:
        """Launch the camera; returns the captured asset, or None when the user cancelled."""
        self.permissions.require(Capability.CAMERA)
        if self.state != CaptureState.IDLE:
            raise CaptureError(f"Cannot capture while {self.state.value}", code="busy")

        self.state = CaptureState.CAPTURING
        try:
            response = await self.camera.launch(self.options)
        except Exception as exc:
            self.state = CaptureState.IDLE
            raise CaptureError(str(exc) or "Unknown error", code="camera_failed") from exc

        if response.did_cancel:
            self.state = CaptureState.IDLE
            logger.info("capture_cancelled")
            return None
        if response.error_code:
            self.state = CaptureState.IDLE
            logger.warning("capture_failed code=%s reason=%s", response.error_code, response.error_message)
            raise CaptureError(response.error_message or "Unknown error", code=response.error_code)
        if not response.assets or not response.assets[0]:
            self.state = CaptureState.IDLE
            raise CaptureError("Camera returned no image", code="no_asset")

        self.asset = CapturedAsset(local_uri=response.assets[0])
        self.state = CaptureState.CAPTURED
        logger.info("captured uri=%s", self.asset.local_uri)
        return self.asset

    def retake(self) -> None:
        if self.state == CaptureState.UPLOADING:
            raise UploadInProgressError()
        if self.asset is not None:
            logger.info("discarded uri=%s", self.asset.local_uri)
        self.asset = None
        self.state = CaptureState.IDLE

    def begin_upload(self) -> CapturedAsset:
        if self.state == CaptureState.UPLOADING:
            raise UploadInProgressError()
        if self.state != CaptureState.CAPTURED or self.asset is None:
            raise CaptureError("No image to upload", code="no_asset")
        self.state = CaptureState.UPLOADING
        return self.asset

    def finish_upload(self, success: bool) -> None:
        if self.state != CaptureState.UPLOADING:
            return
        if success:
            self.asset = None
            self.state = CaptureState.IDLE
        else:
            # the asset stays in memory so Save Photo can be re-attempted
            self.state = CaptureState.CAPTURED
