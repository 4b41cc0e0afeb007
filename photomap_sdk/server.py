"""
Reference backend: a TinyDB document store and a directory-backed object store behind one FastAPI app.

Usage:
    photomap serve --config configs/store.sample.yml
"""
import logging
import threading
import uuid
from json import JSONDecodeError
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import quote

from fastapi import FastAPI, HTTPException, Path as ApiPath, Query, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict
from tinydb import TinyDB

from photomap_sdk.clients.base import SERVER_TIMESTAMP
from photomap_sdk.config import StoreConfig
from photomap_sdk.core.timeutil import utc_now_iso

logger = logging.getLogger(__name__)


class DocumentPayload(BaseModel):
    data: dict[str, Any]

    model_config = ConfigDict(extra="forbid")


class CollectionStore:
    """Append-only TinyDB collections, one JSON file per allowed collection, behind one lock."""

    def __init__(self, db_dir: Path, collections: list[str]):
        if not db_dir.exists():
            raise RuntimeError(f"db_dir does not exist: {db_dir}")
        self.collections = {name: TinyDB(db_dir / f"db_{name}.json") for name in collections}
        self.lock = threading.Lock()

    def _locked(self, collection: str, fn):
        db = self.collections.get(collection)
        if db is None:
            raise HTTPException(status_code=404, detail=f"Unknown collection '{collection}'")
        try:
            with self.lock:
                return fn(db)
        except JSONDecodeError as exc:
            raise HTTPException(status_code=500, detail=f"Collection file is corrupted: {exc}") from exc

    def documents(self, collection: str, order_by: str | None = None, descending: bool = True) -> list[dict]:
        docs = self._locked(collection, lambda db: [dict(doc) for doc in db.all()])
        if order_by is None:
            return docs
        return order_documents(docs, order_by, descending)

    def append(self, collection: str, data: dict[str, Any]) -> str:
        document = resolve_server_values(data)
        document["id"] = uuid.uuid4().hex
        self._locked(collection, lambda db: db.insert(document))
        logger.info("document_appended collection=%s id=%s", collection, document["id"])
        return document["id"]

    def close(self) -> None:
        for db in self.collections.values():
            db.close()


class BlobStore:
    def __init__(self, root: Path):
        if not root.exists():
            raise RuntimeError(f"blob_dir does not exist: {root}")
        self.root = root.resolve()

    def path_for(self, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or any(part in ("..", ".") for part in parts) or key.startswith("/"):
            raise HTTPException(status_code=400, detail=f"Invalid object key '{key}'")
        return self.root.joinpath(*parts)

    def write(self, key: str, data: bytes) -> int:
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return len(data)

    def existing(self, key: str) -> Path:
        path = self.path_for(key)
        if not path.is_file():
            raise HTTPException(status_code=404, detail=f"Object not found: {key}")
        return path


def resolve_server_values(data: dict[str, Any]) -> dict[str, Any]:
    stamped = dict(data)
    now = utc_now_iso()
    for field, value in data.items():
        if value == SERVER_TIMESTAMP:
            stamped[field] = now
    return stamped


def order_documents(docs: list[dict], order_by: str, descending: bool) -> list[dict]:
    present = [doc for doc in docs if doc.get(order_by) is not None]
    try:
        return sorted(present, key=lambda doc: doc[order_by], reverse=descending)
    except TypeError as exc:
        raise HTTPException(status_code=400, detail=f"Field '{order_by}' is not orderable") from exc


def create_app(config: StoreConfig) -> FastAPI:
    store = CollectionStore(Path(config.db_dir), config.allowed_collections)
    blobs = BlobStore(Path(config.blob_dir))
    app = FastAPI(title="photomap store")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/{collection}")
    def list_documents(
        collection: str = ApiPath(..., description="Collection name"),
        order_by: str | None = Query(default=None),
        direction: str = Query(default="desc", pattern="^(asc|desc)$"),
    ):
        return store.documents(collection, order_by, direction == "desc")

    @app.post("/api/{collection}")
    def append_document(
        payload: DocumentPayload,
        collection: str = ApiPath(..., description="Collection name"),
    ):
        doc_id = store.append(collection, payload.data)
        return JSONResponse({"id": doc_id}, status_code=201)

    @app.put("/storage/{key:path}")
    async def put_object(request: Request, key: str):
        data = await request.body()
        size = blobs.write(key, data)
        logger.info("object_stored key=%s bytes=%d", key, size)
        return JSONResponse({"key": key, "size": size}, status_code=201)

    @app.get("/storage/{key:path}")
    def get_object(key: str):
        return FileResponse(blobs.existing(key), media_type="application/octet-stream")

    @app.get("/urls/{key:path}")
    def object_url(key: str):
        blobs.existing(key)
        return {"url": f"{config.base_url}/storage/{quote(key)}"}

    @app.on_event("shutdown")
    def close_dbs():
        store.close()

    return app
