"""
Device capability interfaces and the desktop implementations used by the CLI.

A mobile host binds these protocols to the platform permission subsystem,
camera and location service. On a workstation there is no camera or GPS, so
the CLI "captures" an existing image file and reports a fixed position.
"""

import logging
from pathlib import Path
from typing import Mapping, Protocol

from photomap_sdk.core.schema import (
    PLATFORM_PERMISSIONS,
    CameraOptions,
    CameraResponse,
    Capability,
    LocationOptions,
    PermissionStatus,
    PositionFix,
)
from photomap_sdk.core.timeutil import Clock, now_ms

logger = logging.getLogger(__name__)


class PermissionBackend(Protocol):
    async def check(self, capability: Capability) -> PermissionStatus: ...

    async def request(self, capability: Capability) -> PermissionStatus: ...

    async def open_settings(self) -> None: ...


class LocationService(Protocol):
    async def get_current_position(self, options: LocationOptions) -> PositionFix: ...


class Camera(Protocol):
    async def launch(self, options: CameraOptions) -> CameraResponse: ...


class StaticPermissionBackend:
    """Permission table fixed at construction; undetermined entries are granted on request."""

    def __init__(
        self,
        statuses: Mapping[Capability, PermissionStatus] | None = None,
        platform: str = "android",
    ):
        if platform not in PLATFORM_PERMISSIONS:
            raise ValueError(f"Unknown platform '{platform}'")
        self.platform = platform
        self.statuses = {cap: PermissionStatus.GRANTED for cap in Capability}
        if statuses:
            self.statuses.update(statuses)

    async def check(self, capability: Capability) -> PermissionStatus:
        return self.statuses[capability]

    async def request(self, capability: Capability) -> PermissionStatus:
        status = self.statuses[capability]
        if status == PermissionStatus.UNKNOWN:
            status = PermissionStatus.GRANTED
            self.statuses[capability] = status
        logger.info(
            "permission_request id=%s status=%s",
            PLATFORM_PERMISSIONS[self.platform][capability],
            status.value,
        )
        return status

    async def open_settings(self) -> None:
        logger.info("open_settings platform=%s unsupported on desktop", self.platform)


class StaticLocationService:
    def __init__(self, latitude: float, longitude: float, accuracy: float | None = None, clock: Clock = now_ms):
        self.latitude = latitude
        self.longitude = longitude
        self.accuracy = accuracy
        self.clock = clock

    async def get_current_position(self, options: LocationOptions) -> PositionFix:
        return PositionFix(
            latitude=self.latitude,
            longitude=self.longitude,
            accuracy=self.accuracy,
            timestamp=self.clock(),
        )


class FileCamera:
    """Treats an existing image file as the captured photo; no file means the user cancelled."""

    def __init__(self, path: str | Path | None):
        self.path = Path(path) if path is not None else None

    async def launch(self, options: CameraOptions) -> CameraResponse:
        if self.path is None:
            return CameraResponse(did_cancel=True)
        if not self.path.is_file():
            return CameraResponse(error_code="camera_unavailable", error_message=f"Image not found: {self.path}")
        return CameraResponse(assets=[self.path.resolve().as_uri()])
