"""Read projections for the map and gallery screens."""

import mgrs
from mgrs.core import MGRSError

from photomap_sdk.core.schema import (
    GeoJsonFeature,
    GeoJsonFeatureCollection,
    GeoJsonPoint,
    LocationSample,
    MapRegion,
    PhotoRecord,
)

DEFAULT_CENTER = (37.78825, -122.4324)
GALLERY_COLUMNS = 2


def format_coordinates(location: LocationSample, precision: int = 6) -> str:
    return f"{location.latitude:.{precision}f}, {location.longitude:.{precision}f}"


def to_mgrs(location: LocationSample) -> str | None:
    try:
        return mgrs.MGRS().toMGRS(location.latitude, location.longitude)
    except MGRSError:
        # no grid reference for this position
        return None


def initial_region(location: LocationSample | None = None) -> MapRegion:
    if location is None:
        lat, lon = DEFAULT_CENTER
    else:
        lat, lon = location.latitude, location.longitude
    return MapRegion(latitude=lat, longitude=lon)


def map_markers(records: list[PhotoRecord]) -> GeoJsonFeatureCollection:
    features = []
    for record in records:
        loc = record.location
        features.append(GeoJsonFeature(
            id=record.id,
            geometry=GeoJsonPoint(coordinates=(loc.longitude, loc.latitude)),
            properties={
                "imageUrl": record.image_url,
                "fileName": record.file_name,
                "accuracy": loc.accuracy,
                "mgrs": to_mgrs(loc),
            },
        ))
    bbox = None
    if features:
        lons = [r.location.longitude for r in records]
        lats = [r.location.latitude for r in records]
        bbox = [min(lons), min(lats), max(lons), max(lats)]
    return GeoJsonFeatureCollection(features=features, bbox=bbox)


def gallery_rows(records: list[PhotoRecord], columns: int = GALLERY_COLUMNS) -> list[list[PhotoRecord]]:
    if columns < 1:
        raise ValueError("columns must be >= 1")
    return [records[i:i + columns] for i in range(0, len(records), columns)]
