from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class GeoJsonPoint(BaseModel):
    type: Literal["Point"] = Field(default="Point", frozen=True)
    coordinates: tuple[float, float]

    model_config = ConfigDict(extra="forbid")


class GeoJsonFeature(BaseModel):
    type: Literal["Feature"] = Field(default="Feature", frozen=True)
    geometry: GeoJsonPoint
    properties: dict[str, Any]
    id: str | int | None = None

    model_config = ConfigDict(extra="forbid")


class GeoJsonFeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = Field(
        default="FeatureCollection",
        frozen=True,
    )
    features: list[GeoJsonFeature]
    bbox: list[float] | None = None

    model_config = ConfigDict(extra="forbid")


class MapRegion(BaseModel):
    latitude: float
    longitude: float
    latitude_delta: float = Field(default=0.015, alias="latitudeDelta")
    longitude_delta: float = Field(default=0.0121, alias="longitudeDelta")

    model_config = ConfigDict(populate_by_name=True, extra="forbid")
