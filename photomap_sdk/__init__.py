"""
Photomap SDK
============

Geotagged photo capture and sync: permission gating, single-shot location
resolution, camera capture, blob + metadata upload, and the newest-first read
projection used by map and gallery screens. Storage backends and device
capabilities are injected; ``photomap_sdk.clients`` and
``photomap_sdk.devices`` provide HTTP and desktop implementations.
"""

from photomap_sdk.core import (
    CaptureController,
    CaptureSession,
    LocationProvider,
    PermissionCoordinator,
    PhotoRepository,
    UploadPipeline,
)
from photomap_sdk.core.schema import (
    Capability,
    CapturedAsset,
    LocationSample,
    PermissionStatus,
    PhotoRecord,
)
from photomap_sdk.clients import DocumentStoreClient, ObjectStorageClient
from photomap_sdk.views import format_coordinates, gallery_rows, initial_region, map_markers

__all__ = [
    "CaptureController",
    "CaptureSession",
    "LocationProvider",
    "PermissionCoordinator",
    "PhotoRepository",
    "UploadPipeline",
    "Capability",
    "CapturedAsset",
    "LocationSample",
    "PermissionStatus",
    "PhotoRecord",
    "DocumentStoreClient",
    "ObjectStorageClient",
    "format_coordinates",
    "gallery_rows",
    "initial_region",
    "map_markers",
]
