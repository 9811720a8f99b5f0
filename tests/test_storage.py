import os
from unittest.mock import patch

from vastu_client.storage import InMemoryKeyValueStore, PersistentKeyValueStore


def test_persistent_store_round_trip(tmp_path):
    path = str(tmp_path / "prefs.json")
    store = PersistentKeyValueStore(path)

    store.set("flag", True)
    store.set_many({"name": "home", "count": 2})

    reopened = PersistentKeyValueStore(path)
    assert reopened.encrypted is False
    assert reopened.get("flag") is True
    assert reopened.snapshot() == {"flag": True, "name": "home", "count": 2}


def test_persistent_store_remove_and_missing_keys(tmp_path):
    store = PersistentKeyValueStore(str(tmp_path / "prefs.json"))
    store.set_many({"a": 1, "b": 2})

    store.remove("a", "missing")

    assert store.get("a") is None
    assert store.get("missing", "fallback") == "fallback"
    assert store.snapshot() == {"b": 2}


def test_clear_removes_backing_file(tmp_path):
    path = str(tmp_path / "prefs.json")
    store = PersistentKeyValueStore(path)
    store.set("a", 1)
    assert os.path.exists(path)

    store.clear()

    assert not os.path.exists(path)
    assert store.snapshot() == {}


def test_unreadable_document_loads_as_empty(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    store = PersistentKeyValueStore(str(path))

    assert store.snapshot() == {}
    store.set("a", 1)
    assert store.get("a") == 1


def test_in_memory_store_copies_values():
    store = InMemoryKeyValueStore(encrypted=True)
    values = {"items": [1, 2]}
    store.set_many(values)
    values["items"].append(3)

    assert store.encrypted is True
    assert store.get("items") == [1, 2]
    snapshot = store.snapshot()
    snapshot["items"].append(4)
    assert store.get("items") == [1, 2]


def test_encrypted_store_falls_back_to_plain_file(tmp_path):
    path = str(tmp_path / "credentials.bin")
    with patch("vastu_client.storage.build_encrypted_persistence", side_effect=RuntimeError("no keyring")):
        store = PersistentKeyValueStore(path, encrypted=True)

    assert store.encrypted is False
    store.set("auth_token", "abc")
    assert PersistentKeyValueStore(path).get("auth_token") == "abc"


def test_encrypted_store_reports_encryption(tmp_path):
    path = str(tmp_path / "credentials.bin")
    with patch("vastu_client.storage.build_encrypted_persistence") as build:
        store = PersistentKeyValueStore(path, encrypted=True)

    build.assert_called_once_with(path)
    assert store.encrypted is True
