from pathlib import Path
from typing import Literal, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field

from photomap_sdk.core.schema import CameraOptions, LocationOptions

TConfig = TypeVar("TConfig", bound=BaseModel)


class ClientConfig(BaseModel):
    store_url: str
    collection: str = "photos"
    storage_prefix: str = "images"
    request_timeout: float = Field(default=30.0, gt=0)
    platform: Literal["android", "ios"] = "android"
    location: LocationOptions = Field(default_factory=LocationOptions)
    camera: CameraOptions = Field(default_factory=CameraOptions)

    model_config = ConfigDict(extra="forbid")


class StoreConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 5001
    db_dir: str
    blob_dir: str
    allowed_collections: list[str] = Field(default_factory=lambda: ["photos"])
    public_url: str | None = None

    model_config = ConfigDict(extra="forbid")

    @property
    def base_url(self) -> str:
        return (self.public_url or f"http://{self.host}:{self.port}").rstrip("/")


def load_config(path: Path, model: type[TConfig]) -> TConfig:
    with path.open("r", encoding="utf-8") as file:
        cfg = yaml.safe_load(file)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return model.model_validate(cfg)
