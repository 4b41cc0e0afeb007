from photomap_sdk.core.schema import (
    Capability,
    CapturedAsset,
    CaptureState,
    LocationSample,
    Notice,
    PermissionStatus,
    PhotoRecord,
    SessionState,
    UploadProgress,
    UploadStatus,
)
from photomap_sdk.core.errors import (
    CaptureError,
    LocationError,
    PermissionDeniedError,
    PhotoMapError,
    ReadError,
    UploadError,
    UploadInProgressError,
    UploadPreconditionError,
)
from photomap_sdk.core.permissions import PermissionCoordinator
from photomap_sdk.core.location import LocationProvider
from photomap_sdk.core.capture import CaptureController
from photomap_sdk.core.upload import UploadPipeline, build_file_name
from photomap_sdk.core.repository import PhotoRepository
from photomap_sdk.core.session import CaptureSession

__all__ = [
    "Capability",
    "CapturedAsset",
    "CaptureState",
    "LocationSample",
    "Notice",
    "PermissionStatus",
    "PhotoRecord",
    "SessionState",
    "UploadProgress",
    "UploadStatus",
    "CaptureError",
    "LocationError",
    "PermissionDeniedError",
    "PhotoMapError",
    "ReadError",
    "UploadError",
    "UploadInProgressError",
    "UploadPreconditionError",
    "PermissionCoordinator",
    "LocationProvider",
    "CaptureController",
    "UploadPipeline",
    "build_file_name",
    "PhotoRepository",
    "CaptureSession",
]
