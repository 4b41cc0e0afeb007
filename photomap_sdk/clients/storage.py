from urllib.parse import quote

import requests

CHUNK_SIZE = 64 * 1024


def iter_chunks(data, on_progress=None, chunk_size=CHUNK_SIZE):
    total = len(data)
    sent = 0
    if on_progress:
        on_progress(0, total)
    while sent < total:
        chunk = data[sent:sent + chunk_size]
        yield chunk
        sent += len(chunk)
        if on_progress:
            on_progress(sent, total)


class ObjectStorageClient:
    def __init__(self, base_url="http://localhost:5001", timeout=30.0, session=None, chunk_size=CHUNK_SIZE):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.chunk_size = chunk_size

    def _object_url(self, key):
        return f"{self.base_url}/storage/{quote(key)}"

    def put(self, key, data, on_progress=None):
        headers = {"Content-Type": "application/octet-stream"}
        response = self.session.put(
            self._object_url(key),
            data=iter_chunks(data, on_progress, self.chunk_size),
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()

    def download_url(self, key):
        response = self.session.get(f"{self.base_url}/urls/{quote(key)}", timeout=self.timeout)
        response.raise_for_status()
        return response.json()["url"]
