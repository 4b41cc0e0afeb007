from typing import Any, Callable, Protocol


SERVER_TIMESTAMP = "__server_timestamp__"

ProgressCallback = Callable[[int, int], None]


class ObjectStorage(Protocol):
    def put(self, key: str, data: bytes, on_progress: ProgressCallback | None = None) -> None: ...

    def download_url(self, key: str) -> str: ...


class DocumentStore(Protocol):
    def append(self, collection: str, document: dict[str, Any]) -> str: ...

    def query(self, collection: str, order_by: str, descending: bool = True) -> list[dict[str, Any]]: ...
