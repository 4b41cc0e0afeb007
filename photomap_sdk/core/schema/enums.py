from enum import Enum


class Capability(str, Enum):
    CAMERA = "camera"
    LOCATION = "location"


class PermissionStatus(str, Enum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"
    BLOCKED = "blocked"
    UNAVAILABLE = "unavailable"


class CaptureState(str, Enum):
    IDLE = "idle"
    CAPTURING = "capturing"
    CAPTURED = "captured"
    UPLOADING = "uploading"


class UploadStatus(str, Enum):
    IDLE = "idle"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class LocationErrorCode(str, Enum):
    TIMEOUT = "timeout"
    SERVICE_DISABLED = "service_disabled"
    PERMISSION_REVOKED = "permission_revoked"
    POSITION_UNAVAILABLE = "position_unavailable"
    STALE = "stale"


class UploadStage(str, Enum):
    PRECONDITION = "precondition"
    READ = "read"
    TRANSFER = "transfer"
    RESOLVE_URL = "resolve_url"
    METADATA = "metadata"


PLATFORM_PERMISSIONS = {
    "android": {
        Capability.CAMERA: "android.permission.CAMERA",
        Capability.LOCATION: "android.permission.ACCESS_FINE_LOCATION",
    },
    "ios": {
        Capability.CAMERA: "ios.permission.CAMERA",
        Capability.LOCATION: "ios.permission.LOCATION_WHEN_IN_USE",
    },
}

CAPABILITY_LABELS = {
    Capability.CAMERA: "Camera",
    Capability.LOCATION: "Location",
}


class NoticeAction(str, Enum):
    OK = "ok"
    CANCEL = "cancel"
    RETRY = "retry"
    OPEN_SETTINGS = "open_settings"
