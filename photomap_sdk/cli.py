"""
Usage:
    photomap serve --config configs/store.sample.yml
    photomap publish --config configs/client.sample.yml --image ./IMG_0001.jpg --lat 37.78825 --lon -122.4324 --accuracy 5
    photomap list --config configs/client.sample.yml --columns 2
    photomap list --config configs/client.sample.yml --geojson
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from photomap_sdk.clients import DocumentStoreClient, ObjectStorageClient
from photomap_sdk.config import ClientConfig, StoreConfig, load_config
from photomap_sdk.core import (
    CaptureController,
    CaptureSession,
    LocationProvider,
    PermissionCoordinator,
    PhotoRecord,
    PhotoRepository,
    ReadError,
    UploadPipeline,
)
from photomap_sdk.core.schema import Notice
from photomap_sdk.devices import FileCamera, StaticLocationService, StaticPermissionBackend
from photomap_sdk.views import format_coordinates, gallery_rows, map_markers

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    logging.basicConfig(level=level.upper(), handlers=handlers, format=LOG_FORMAT, force=True)


def print_notice(notice: Notice) -> None:
    print(f"[{notice.title}] {notice.message}")


def build_session(
    config: ClientConfig,
    image: str | Path | None,
    lat: float,
    lon: float,
    accuracy: float | None = None,
    notify=print_notice,
) -> CaptureSession:
    permissions = PermissionCoordinator(StaticPermissionBackend(platform=config.platform), notify)
    location = LocationProvider(StaticLocationService(lat, lon, accuracy), permissions, config.location)
    capture = CaptureController(FileCamera(image), permissions, config.camera)
    pipeline = UploadPipeline(
        ObjectStorageClient(config.store_url, timeout=config.request_timeout),
        DocumentStoreClient(config.store_url, timeout=config.request_timeout),
        collection=config.collection,
        storage_prefix=config.storage_prefix,
    )
    return CaptureSession(permissions, location, capture, pipeline, notify)


async def publish(session: CaptureSession) -> PhotoRecord | None:
    await session.start()
    if session.state.location is None:
        return None
    if await session.capture() is None:
        return None
    return await session.save_photo()


def cmd_serve(args) -> int:
    import uvicorn

    from photomap_sdk.server import create_app

    config = load_config(Path(args.config), StoreConfig)
    uvicorn.run(create_app(config), host=config.host, port=config.port)
    return 0


def cmd_publish(args) -> int:
    config = load_config(Path(args.config), ClientConfig)
    session = build_session(config, args.image, args.lat, args.lon, args.accuracy)
    record = asyncio.run(publish(session))
    if record is None:
        return 1
    print(f"published id={record.id} file={record.file_name} url={record.image_url}")
    return 0


def cmd_list(args) -> int:
    config = load_config(Path(args.config), ClientConfig)
    repository = PhotoRepository(
        DocumentStoreClient(config.store_url, timeout=config.request_timeout),
        collection=config.collection,
    )
    try:
        records = asyncio.run(repository.list_photos())
    except ReadError as exc:
        print(f"[Error] {exc}")
        return 1
    if args.geojson:
        print(map_markers(records).model_dump_json(indent=2))
        return 0
    for row in gallery_rows(records, args.columns):
        print(" | ".join(f"{r.file_name} ({format_coordinates(r.location, 4)})" for r in row))
    print(f"{len(records)} photos")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="photomap", description="Geotagged photo capture and sync")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the reference document/object store")
    serve.add_argument("--config", required=True, help="Path to YAML store config")
    serve.set_defaults(func=cmd_serve)

    pub = sub.add_parser("publish", help="Capture an image file with a position and upload it")
    pub.add_argument("--config", required=True, help="Path to YAML client config")
    pub.add_argument("--image", required=True)
    pub.add_argument("--lat", type=float, required=True)
    pub.add_argument("--lon", type=float, required=True)
    pub.add_argument("--accuracy", type=float, default=None)
    pub.set_defaults(func=cmd_publish)

    lst = sub.add_parser("list", help="List published photos newest first")
    lst.add_argument("--config", required=True, help="Path to YAML client config")
    lst.add_argument("--columns", type=int, default=2)
    lst.add_argument("--geojson", action="store_true", help="Print map markers as GeoJSON")
    lst.set_defaults(func=cmd_list)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
