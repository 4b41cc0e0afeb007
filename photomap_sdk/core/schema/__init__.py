from .enums import (
    CAPABILITY_LABELS,
    PLATFORM_PERMISSIONS,
    Capability,
    CaptureState,
    LocationErrorCode,
    NoticeAction,
    PermissionStatus,
    UploadStage,
    UploadStatus,
)
from .models import (
    DEFAULT_FILE_NAME,
    CameraOptions,
    CameraResponse,
    CapturedAsset,
    LocationOptions,
    LocationSample,
    Notice,
    PhotoRecord,
    PositionFix,
    SessionState,
    UploadProgress,
)
from .spatial import GeoJsonFeature, GeoJsonFeatureCollection, GeoJsonPoint, MapRegion

__all__ = [
    "CAPABILITY_LABELS",
    "PLATFORM_PERMISSIONS",
    "Capability",
    "CaptureState",
    "LocationErrorCode",
    "NoticeAction",
    "PermissionStatus",
    "UploadStage",
    "UploadStatus",
    "DEFAULT_FILE_NAME",
    "CameraOptions",
    "CameraResponse",
    "CapturedAsset",
    "LocationOptions",
    "LocationSample",
    "Notice",
    "PhotoRecord",
    "PositionFix",
    "SessionState",
    "UploadProgress",
    "GeoJsonFeature",
    "GeoJsonFeatureCollection",
    "GeoJsonPoint",
    "MapRegion",
]
