from .base import SERVER_TIMESTAMP, DocumentStore, ObjectStorage, ProgressCallback
from .db import DocumentStoreClient
from .storage import ObjectStorageClient

__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentStore",
    "ObjectStorage",
    "ProgressCallback",
    "DocumentStoreClient",
    "ObjectStorageClient",
]
