import asyncio
import logging
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse
from urllib.request import url2pathname

from photomap_sdk.clients.base import SERVER_TIMESTAMP, DocumentStore, ObjectStorage
from photomap_sdk.core.errors import UploadError, UploadInProgressError, UploadPreconditionError
from photomap_sdk.core.schema import CapturedAsset, LocationSample, PhotoRecord, UploadProgress, UploadStage
from photomap_sdk.core.timeutil import Clock, now_ms

logger = logging.getLogger(__name__)

PHOTOS_COLLECTION = "photos"
STORAGE_PREFIX = "images"

ProgressObserver = Callable[[UploadProgress], None]


def build_file_name(asset: CapturedAsset, capture_ms: int) -> str:
    return f"photo_{capture_ms}_{asset.basename}"


def read_local_asset(asset: CapturedAsset) -> bytes:
    uri = asset.local_uri
    if uri.startswith("file:"):
        path = Path(url2pathname(urlparse(uri).path))
    else:
        path = Path(uri)
    return path.read_bytes()


class UploadPipeline:
    """Publishes one captured photo: blob first, then its metadata document.

    A failure before the metadata write leaves no record; a failure of the
    metadata write leaves the stored blob orphaned. Neither case is rolled
    back or retried here; the caller may start again from scratch.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        documents: DocumentStore,
        collection: str = PHOTOS_COLLECTION,
        storage_prefix: str = STORAGE_PREFIX,
        clock: Clock = now_ms,
        read_asset: Callable[[CapturedAsset], bytes] = read_local_asset,
    ):
        self.storage = storage
        self.documents = documents
        self.collection = collection
        self.storage_prefix = storage_prefix.strip("/")
        self.clock = clock
        self.read_asset = read_asset
        self.progress: UploadProgress | None = None
        self._in_progress = False

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def storage_key(self, file_name: str) -> str:
        return f"{self.storage_prefix}/{file_name}"

    async def upload(
        self,
        asset: CapturedAsset | None,
        location: LocationSample | None,
        on_progress: ProgressObserver | None = None,
    ) -> PhotoRecord:
        if asset is None:
            raise UploadPreconditionError("No image to upload")
        if location is None:
            raise UploadPreconditionError(
                "Location not available. Please ensure location services are enabled."
            )
        if self._in_progress:
            raise UploadInProgressError()

        self._in_progress = True
        self.progress = None
        try:
            return await self._publish(asset, location, on_progress)
        finally:
            self._in_progress = False

    async def _publish(
        self,
        asset: CapturedAsset,
        location: LocationSample,
        on_progress: ProgressObserver | None,
    ) -> PhotoRecord:
        file_name = build_file_name(asset, self.clock())
        key = self.storage_key(file_name)

        try:
            data = await asyncio.to_thread(self.read_asset, asset)
        except (OSError, ValueError) as exc:
            raise UploadError(UploadStage.READ, f"Cannot read {asset.local_uri}: {exc}") from exc

        loop = asyncio.get_running_loop()

        def report(transferred: int, total: int) -> None:
            progress = UploadProgress(bytes_transferred=transferred, total_bytes=total)
            loop.call_soon_threadsafe(self._emit, progress, on_progress)

        logger.info("upload_start key=%s bytes=%d", key, len(data))
        try:
            await asyncio.to_thread(self.storage.put, key, data, report)
        except Exception as exc:
            logger.warning("upload_transfer_failed key=%s reason=%s", key, exc)
            raise UploadError(UploadStage.TRANSFER, f"Transfer failed: {exc}") from exc

        try:
            image_url = await asyncio.to_thread(self.storage.download_url, key)
        except Exception as exc:
            logger.warning("orphaned_blob key=%s stage=resolve_url reason=%s", key, exc)
            raise UploadError(UploadStage.RESOLVE_URL, f"Cannot resolve download URL: {exc}", orphaned_key=key) from exc

        document = {
            "imageUrl": image_url,
            "location": location.model_dump(mode="json"),
            "uploadedAt": SERVER_TIMESTAMP,
            "fileName": file_name,
        }
        try:
            record_id = await asyncio.to_thread(self.documents.append, self.collection, document)
        except Exception as exc:
            logger.warning("orphaned_blob key=%s stage=metadata reason=%s", key, exc)
            raise UploadError(UploadStage.METADATA, f"Saving photo metadata failed: {exc}", orphaned_key=key) from exc

        logger.info("upload_done id=%s key=%s", record_id, key)
        return PhotoRecord(id=record_id, image_url=image_url, location=location, file_name=file_name)

    def _emit(self, progress: UploadProgress, on_progress: ProgressObserver | None) -> None:
        self.progress = progress
        if on_progress:
            on_progress(progress)
