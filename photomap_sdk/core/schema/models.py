from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .enums import Capability, CaptureState, NoticeAction, PermissionStatus, UploadStatus


DEFAULT_FILE_NAME = "Unknown"


class LocationSample(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    accuracy: float | None = None
    timestamp: int

    model_config = ConfigDict(frozen=True, extra="ignore")


class PositionFix(BaseModel):
    """Raw answer of the device location service."""

    latitude: float
    longitude: float
    accuracy: float | None = None
    timestamp: int

    model_config = ConfigDict(extra="forbid")

    def to_sample(self) -> LocationSample:
        return LocationSample(
            latitude=self.latitude,
            longitude=self.longitude,
            accuracy=self.accuracy,
            timestamp=self.timestamp,
        )


class CapturedAsset(BaseModel):
    local_uri: str = Field(alias="localUri", min_length=1)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @property
    def basename(self) -> str:
        return self.local_uri[self.local_uri.rfind("/") + 1:]


class PhotoRecord(BaseModel):
    id: str
    image_url: str = Field(alias="imageUrl", min_length=1)
    location: LocationSample
    uploaded_at: datetime | None = Field(default=None, alias="uploadedAt")
    file_name: str = Field(default=DEFAULT_FILE_NAME, alias="fileName")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class UploadProgress(BaseModel):
    bytes_transferred: int = Field(alias="bytesTransferred", ge=0)
    total_bytes: int = Field(alias="totalBytes", ge=0)

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @property
    def percent(self) -> float:
        if self.total_bytes == 0:
            return 100.0
        return self.bytes_transferred / self.total_bytes * 100


class CameraOptions(BaseModel):
    media_type: Literal["photo"] = "photo"
    save_to_photos: bool = True
    camera_type: Literal["back", "front"] = "back"

    model_config = ConfigDict(extra="forbid")


class CameraResponse(BaseModel):
    did_cancel: bool = False
    error_code: str | None = None
    error_message: str | None = None
    assets: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class LocationOptions(BaseModel):
    enable_high_accuracy: bool = True
    timeout_ms: int = Field(default=15000, gt=0)
    maximum_age_ms: int = Field(default=10000, ge=0)
    force_fresh_request: bool = True
    show_location_dialog: bool = True

    model_config = ConfigDict(extra="forbid")


class Notice(BaseModel):
    title: str
    message: str
    actions: tuple[NoticeAction, ...] = (NoticeAction.OK,)

    model_config = ConfigDict(frozen=True, extra="forbid")


class SessionState(BaseModel):
    permissions: dict[Capability, PermissionStatus] = Field(
        default_factory=lambda: {cap: PermissionStatus.UNKNOWN for cap in Capability}
    )
    location: LocationSample | None = None
    asset: CapturedAsset | None = None
    capture_state: CaptureState = CaptureState.IDLE
    upload_status: UploadStatus = UploadStatus.IDLE
    progress: UploadProgress | None = None
    locating: bool = False
    last_error: str | None = None

    model_config = ConfigDict(extra="forbid")
