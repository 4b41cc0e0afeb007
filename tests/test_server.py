import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from photomap_sdk.clients.base import SERVER_TIMESTAMP
from photomap_sdk.config import StoreConfig
from photomap_sdk.server import BlobStore, CollectionStore, create_app

LOCATION = {"latitude": 37.78825, "longitude": -122.4324, "accuracy": 5.0, "timestamp": 1700000000000}


@pytest.fixture
def store_config(tmp_path):
    db_dir = tmp_path / "db"
    blob_dir = tmp_path / "blobs"
    db_dir.mkdir()
    blob_dir.mkdir()
    return StoreConfig(db_dir=str(db_dir), blob_dir=str(blob_dir), public_url="http://photos.test")


@pytest.fixture
def client(store_config):
    with TestClient(create_app(store_config)) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_put_then_fetch_object(client, store_config):
    body = b"\xff\xd8jpeg-bytes"

    response = client.put("/storage/images/photo_1_IMG.jpg", content=body)
    assert response.status_code == 201
    assert response.json() == {"key": "images/photo_1_IMG.jpg", "size": len(body)}

    url = client.get("/urls/images/photo_1_IMG.jpg").json()["url"]
    assert url == "http://photos.test/storage/images/photo_1_IMG.jpg"
    assert client.get("/storage/images/photo_1_IMG.jpg").content == body


def test_missing_object_is_404(client):
    assert client.get("/urls/images/nothing.jpg").status_code == 404
    assert client.get("/storage/images/nothing.jpg").status_code == 404


@pytest.mark.parametrize("key", ["images/../escape.jpg", "/etc/passwd", "a/../../b.jpg", ""])
def test_key_escaping_blob_dir_is_rejected(tmp_path, key):
    blobs = BlobStore(tmp_path)

    with pytest.raises(HTTPException) as excinfo:
        blobs.path_for(key)

    assert excinfo.value.status_code == 400


def test_append_stamps_server_time(client):
    document = {"imageUrl": "http://photos.test/storage/a.jpg", "location": LOCATION, "uploadedAt": SERVER_TIMESTAMP}

    response = client.post("/api/photos", json={"data": document})

    assert response.status_code == 201
    doc_id = response.json()["id"]
    [stored] = client.get("/api/photos").json()
    assert stored["id"] == doc_id
    assert stored["uploadedAt"] != SERVER_TIMESTAMP
    assert stored["uploadedAt"].startswith("20")
    assert stored["location"] == LOCATION


def test_query_orders_and_skips_unordered(client):
    for doc_id, uploaded in [("a", "2024-01-01T00:00:00+00:00"), ("b", "2024-01-03T00:00:00+00:00"), ("c", None)]:
        client.post("/api/photos", json={"data": {"name": doc_id, "uploadedAt": uploaded}})
    client.post("/api/photos", json={"data": {"name": "d", "uploadedAt": "2024-01-02T00:00:00+00:00"}})

    desc = client.get("/api/photos", params={"order_by": "uploadedAt", "direction": "desc"}).json()
    asc = client.get("/api/photos", params={"order_by": "uploadedAt", "direction": "asc"}).json()

    assert [d["name"] for d in desc] == ["b", "d", "a"]
    assert [d["name"] for d in asc] == ["a", "d", "b"]


def test_unknown_collection_is_404(client):
    assert client.get("/api/units").status_code == 404
    assert client.post("/api/units", json={"data": {}}).status_code == 404


def test_invalid_direction_is_rejected(client):
    assert client.get("/api/photos", params={"order_by": "uploadedAt", "direction": "sideways"}).status_code == 422


def test_payload_must_wrap_data(client):
    assert client.post("/api/photos", json={"imageUrl": "x"}).status_code == 422


def test_missing_db_dir_fails_fast(tmp_path):
    config = StoreConfig(db_dir=str(tmp_path / "nope"), blob_dir=str(tmp_path))

    with pytest.raises(RuntimeError, match="db_dir does not exist"):
        create_app(config)


def test_collection_store_appends_and_orders(tmp_path):
    store = CollectionStore(tmp_path, ["photos"])
    first = store.append("photos", {"name": "first", "uploadedAt": "2024-01-01T00:00:00+00:00"})
    store.append("photos", {"name": "second", "uploadedAt": SERVER_TIMESTAMP})

    docs = store.documents("photos", "uploadedAt", descending=True)

    assert [d["name"] for d in docs] == ["second", "first"]
    assert docs[1]["id"] == first
    assert (tmp_path / "db_photos.json").is_file()
    with pytest.raises(HTTPException) as excinfo:
        store.documents("units")
    assert excinfo.value.status_code == 404
    store.close()


def test_corrupted_collection_file_is_500(tmp_path):
    (tmp_path / "db_photos.json").write_text("{not json", encoding="utf-8")
    store = CollectionStore(tmp_path, ["photos"])

    with pytest.raises(HTTPException) as excinfo:
        store.documents("photos")

    assert excinfo.value.status_code == 500
    store.close()
