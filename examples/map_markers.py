"""
Usage:
    python examples/map_markers.py
"""
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from photomap_sdk.core.schema import LocationSample, PhotoRecord
from photomap_sdk.views import gallery_rows, initial_region, map_markers


if __name__ == "__main__":
    photo = PhotoRecord(
        id="a1b2c3",
        image_url="http://127.0.0.1:5001/storage/images/photo_1700000000000_IMG_0001.jpg",
        location=LocationSample(
            latitude=37.78825,
            longitude=-122.4324,
            accuracy=5.0,
            timestamp=1700000000000,
        ),
        uploaded_at=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
        file_name="photo_1700000000000_IMG_0001.jpg",
    )

    print("Initial region:")
    print(initial_region(photo.location).model_dump_json(by_alias=True, indent=2))
    print("Markers:")
    print(map_markers([photo]).model_dump_json(indent=2))
    print(f"Gallery rows: {len(gallery_rows([photo]))}")
