from photomap_sdk.core.schema import (
    CAPABILITY_LABELS,
    Capability,
    LocationErrorCode,
    PermissionStatus,
    UploadStage,
)


class PhotoMapError(Exception):
    """Base class for every error raised by the capture-and-sync pipeline."""


class PermissionDeniedError(PhotoMapError):
    def __init__(self, capability: Capability, status: PermissionStatus):
        self.capability = capability
        self.status = status
        super().__init__(f"{CAPABILITY_LABELS[capability]} permission is {status.value}")

    @property
    def blocked(self) -> bool:
        return self.status == PermissionStatus.BLOCKED


class LocationError(PhotoMapError):
    def __init__(self, code: LocationErrorCode, message: str | None = None):
        self.code = code
        super().__init__(message or code.value.replace("_", " "))


class CaptureError(PhotoMapError):
    def __init__(self, message: str, code: str | None = None):
        self.code = code
        super().__init__(message)


class UploadError(PhotoMapError):
    def __init__(self, stage: UploadStage, message: str, orphaned_key: str | None = None):
        self.stage = stage
        self.orphaned_key = orphaned_key
        super().__init__(message)


class UploadPreconditionError(UploadError):
    def __init__(self, message: str):
        super().__init__(UploadStage.PRECONDITION, message)


class UploadInProgressError(UploadError):
    def __init__(self):
        super().__init__(UploadStage.PRECONDITION, "An upload is already in progress")


class ReadError(PhotoMapError):
    pass
