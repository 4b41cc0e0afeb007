"""
Pytest fixtures and in-memory fakes for the photomap SDK tests
"""
import threading
from datetime import datetime, timedelta, timezone

import pytest

from photomap_sdk.clients.base import SERVER_TIMESTAMP
from photomap_sdk.core import (
    CaptureController,
    CaptureSession,
    LocationProvider,
    PermissionCoordinator,
    PhotoRepository,
    UploadPipeline,
)
from photomap_sdk.core.schema import (
    CameraResponse,
    Capability,
    CapturedAsset,
    LocationOptions,
    LocationSample,
    PermissionStatus,
    PositionFix,
)

T0 = 1700000000000


class FakeClock:
    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakePermissionBackend:
    def __init__(self, statuses=None, request_results=None):
        self.statuses = {cap: PermissionStatus.GRANTED for cap in Capability}
        self.statuses.update(statuses or {})
        self.request_results = request_results or {}
        self.checks = []
        self.requests = []
        self.settings_opened = 0

    async def check(self, capability):
        self.checks.append(capability)
        return self.statuses[capability]

    async def request(self, capability):
        self.requests.append(capability)
        status = self.request_results.get(capability, PermissionStatus.GRANTED)
        self.statuses[capability] = status
        return status

    async def open_settings(self):
        self.settings_opened += 1


class FakeLocationService:
    """Answers each call with the next scripted outcome.

    An outcome is a PositionFix, an exception to raise, or an async callable
    awaited first (used to hold a request open).
    """

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls = 0

    async def get_current_position(self, options):
        self.calls += 1
        outcome = self.outcomes.pop(0)
        if callable(outcome):
            outcome = await outcome()
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeCamera:
    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.launches = []

    async def launch(self, options):
        self.launches.append(options)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class InMemoryObjectStorage:
    def __init__(self, base_url="http://store.test/storage", chunk_size=32 * 1024):
        self.base_url = base_url
        self.chunk_size = chunk_size
        self.blobs = {}
        self.puts = 0
        self.fail_put = None
        self.fail_url = None

    def put(self, key, data, on_progress=None):
        self.puts += 1
        total = len(data)
        sent = 0
        if on_progress:
            on_progress(0, total)
        while sent < total:
            sent = min(total, sent + self.chunk_size)
            if self.fail_put and sent > total // 2:
                self.blobs[key] = data[:sent]
                raise self.fail_put
            if on_progress:
                on_progress(sent, total)
        self.blobs[key] = data

    def download_url(self, key):
        if self.fail_url:
            raise self.fail_url
        if key not in self.blobs:
            raise KeyError(key)
        return f"{self.base_url}/{key}"

    def fetch(self, url):
        return self.blobs[url[len(self.base_url) + 1:]]


class InMemoryDocumentStore:
    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc)):
        self.collections = {}
        self.appends = 0
        self.queries = 0
        self.fail_append = None
        self.fail_query = None
        self.ordered = True
        self._next_time = start
        self._lock = threading.Lock()

    def _server_time(self):
        self._next_time += timedelta(seconds=1)
        return self._next_time.isoformat()

    def append(self, collection, document):
        self.appends += 1
        if self.fail_append:
            raise self.fail_append
        with self._lock:
            docs = self.collections.setdefault(collection, [])
            stored = {k: (self._server_time() if v == SERVER_TIMESTAMP else v) for k, v in document.items()}
            stored["id"] = f"doc{len(docs) + 1}"
            docs.append(stored)
            return stored["id"]

    def insert_raw(self, collection, document):
        self.collections.setdefault(collection, []).append(dict(document))

    def query(self, collection, order_by, descending=True):
        self.queries += 1
        if self.fail_query:
            raise self.fail_query
        docs = [dict(d) for d in self.collections.get(collection, []) if d.get(order_by) is not None]
        if not self.ordered:
            return docs
        return sorted(docs, key=lambda d: d[order_by], reverse=descending)


def fix(lat=37.78825, lon=-122.4324, accuracy=5.0, timestamp=T0):
    return PositionFix(latitude=lat, longitude=lon, accuracy=accuracy, timestamp=timestamp)


def granted(coordinator):
    for cap in Capability:
        coordinator.statuses[cap] = PermissionStatus.GRANTED
    return coordinator


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def permission_backend():
    return FakePermissionBackend()


@pytest.fixture
def permissions(permission_backend, notices):
    return PermissionCoordinator(permission_backend, notices.append)


@pytest.fixture
def location_service():
    return FakeLocationService()


@pytest.fixture
def location_provider(location_service, permissions, clock):
    return LocationProvider(location_service, granted(permissions), LocationOptions(timeout_ms=200), clock)


@pytest.fixture
def camera():
    return FakeCamera()


@pytest.fixture
def capture_controller(camera, permissions):
    return CaptureController(camera, granted(permissions))


@pytest.fixture
def storage():
    return InMemoryObjectStorage()


@pytest.fixture
def documents():
    return InMemoryDocumentStore()


@pytest.fixture
def pipeline(storage, documents, clock):
    return UploadPipeline(storage, documents, clock=clock)


@pytest.fixture
def repository(documents):
    return PhotoRepository(documents)


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "IMG_0001.jpg"
    path.write_bytes(b"\xff\xd8" + b"x" * 150000)
    return path


@pytest.fixture
def asset(image_file):
    return CapturedAsset(local_uri=image_file.as_uri())


@pytest.fixture
def sample():
    return LocationSample(latitude=37.78825, longitude=-122.4324, accuracy=5, timestamp=T0)


@pytest.fixture
def session_factory(permission_backend, location_service, camera, storage, documents, clock, notices):
    def _create(**overrides):
        backend = overrides.get("permission_backend", permission_backend)
        coordinator = PermissionCoordinator(backend, notices.append)
        provider = LocationProvider(
            overrides.get("location_service", location_service),
            coordinator,
            LocationOptions(timeout_ms=200),
            clock,
        )
        controller = CaptureController(overrides.get("camera", camera), coordinator)
        upload = UploadPipeline(storage, documents, clock=clock)
        return CaptureSession(coordinator, provider, controller, upload, notices.append)

    return _create


def captured(image_file):
    return CameraResponse(assets=[image_file.as_uri()])
