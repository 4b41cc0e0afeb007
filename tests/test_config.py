from pathlib import Path

import pytest
from pydantic import ValidationError

from photomap_sdk.config import ClientConfig, StoreConfig, load_config

CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs"


def test_sample_client_config_loads():
    config = load_config(CONFIG_DIR / "client.sample.yml", ClientConfig)

    assert config.store_url == "http://127.0.0.1:5001"
    assert config.location.timeout_ms == 15000
    assert config.location.maximum_age_ms == 10000
    assert config.camera.save_to_photos


def test_sample_store_config_loads():
    config = load_config(CONFIG_DIR / "store.sample.yml", StoreConfig)

    assert config.allowed_collections == ["photos"]
    assert config.base_url == "http://127.0.0.1:5001"


def test_store_base_url_without_public_url():
    config = StoreConfig(host="0.0.0.0", port=8080, db_dir="db", blob_dir="blobs")

    assert config.base_url == "http://0.0.0.0:8080"


def test_unknown_keys_are_rejected(tmp_path):
    path = tmp_path / "client.yml"
    path.write_text("store_url: http://x\nbucket: photos\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_config(path, ClientConfig)


def test_non_mapping_root_is_rejected(tmp_path):
    path = tmp_path / "client.yml"
    path.write_text("- store_url\n", encoding="utf-8")

    with pytest.raises(ValueError, match="mapping"):
        load_config(path, ClientConfig)


def test_invalid_timeout_is_rejected():
    with pytest.raises(ValidationError):
        ClientConfig(store_url="http://x", location={"timeout_ms": 0})
