import asyncio
import logging
from datetime import datetime, timezone

from pydantic import ValidationError

from photomap_sdk.clients.base import DocumentStore
from photomap_sdk.core.errors import ReadError
from photomap_sdk.core.schema import PhotoRecord
from photomap_sdk.core.upload import PHOTOS_COLLECTION

logger = logging.getLogger(__name__)

ORDER_FIELD = "uploadedAt"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(record: PhotoRecord) -> datetime:
    uploaded_at = record.uploaded_at
    if uploaded_at is None:
        return _EPOCH
    if uploaded_at.tzinfo is None:
        return uploaded_at.replace(tzinfo=timezone.utc)
    return uploaded_at


def to_record(document: dict) -> PhotoRecord | None:
    """Validate one stored document, or None when it is not a displayable photo."""
    if not document.get("imageUrl") or not document.get("location"):
        return None
    if not document.get("uploadedAt"):
        return None
    try:
        return PhotoRecord.model_validate(document)
    except ValidationError:
        return None


class PhotoRepository:
    def __init__(self, documents: DocumentStore, collection: str = PHOTOS_COLLECTION):
        self.documents = documents
        self.collection = collection

    async def list_photos(self) -> list[PhotoRecord]:
        """Newest-first photos; partial or legacy documents are skipped."""
        try:
            rows = await asyncio.to_thread(self.documents.query, self.collection, ORDER_FIELD, True)
        except Exception as exc:
            logger.warning("photos_read_failed collection=%s reason=%s", self.collection, exc)
            raise ReadError("Failed to load photos from database") from exc

        records = []
        for row in rows:
            record = to_record(row)
            if record is None:
                logger.debug("photo_skipped id=%s", row.get("id"))
                continue
            records.append(record)
        records.sort(key=_sort_key, reverse=True)
        logger.info("photos_loaded count=%d skipped=%d", len(records), len(rows) - len(records))
        return records
