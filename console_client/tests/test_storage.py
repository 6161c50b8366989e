from __future__ import annotations

import json

from console_client.storage import PERSISTENT_STORE_FILENAME, JsonFileStore, MemoryStore, resolve_storage_path


def test_memory_store_roundtrip_and_clear():
    store = MemoryStore({"a": "1"})
    store.set_item("b", "2")
    assert store.get_item("a") == "1"
    assert store.get_item("b") == "2"
    store.remove_item("a")
    store.remove_item("missing")
    assert store.get_item("a") is None
    store.clear()
    assert store.get_item("b") is None


def test_json_store_persists_across_instances(tmp_path):
    path = tmp_path / "nested" / "storage.json"
    store = JsonFileStore(path)
    store.set_item("lastLogo", "normal")

    assert json.loads(path.read_text(encoding="utf-8")) == {"lastLogo": "normal"}
    reopened = JsonFileStore(path)
    assert reopened.get_item("lastLogo") == "normal"

    reopened.remove_item("lastLogo")
    assert JsonFileStore(path).get_item("lastLogo") is None


def test_json_store_missing_file_reads_empty(tmp_path):
    store = JsonFileStore(tmp_path / "absent.json")
    assert store.get_item("auth_token") is None
    assert not (tmp_path / "absent.json").exists()


def test_json_store_ignores_malformed_content(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    logs: list[str] = []

    class _Logger:
        def debug(self, message: str) -> None:
            logs.append(message)

    store = JsonFileStore(path, logger=_Logger())

    assert store.get_item("auth_token") is None
    assert logs and "Failed to load console storage" in logs[0]


def test_json_store_drops_non_string_values(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps({"auth_token": "abc", "count": 3, "nested": {}}), encoding="utf-8")
    store = JsonFileStore(path)
    assert store.get_item("auth_token") == "abc"
    assert store.get_item("count") is None


def test_json_store_non_object_reads_empty(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text(json.dumps(["auth_token"]), encoding="utf-8")
    assert JsonFileStore(path).get_item("auth_token") is None


def test_resolve_storage_path(tmp_path):
    assert resolve_storage_path(tmp_path) == tmp_path / PERSISTENT_STORE_FILENAME
    assert resolve_storage_path().name == PERSISTENT_STORE_FILENAME
