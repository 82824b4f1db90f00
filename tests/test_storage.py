import json

import pytest

from cfgpanel.storage import JsonFileStorage, MemoryStorage


def test_load_missing_returns_none(file_storage: JsonFileStorage) -> None:
    assert file_storage.load("config.json") is None


def test_save_creates_folder_and_writes_json(file_storage: JsonFileStorage, storage_folder) -> None:
    data = {"nickname": "张三", "calloutNote": {"text": "注意", "switch": True}}
    assert file_storage.save("config.json", data) is True

    path = storage_folder / "config.json"
    assert path.exists()
    assert not (storage_folder / "config.json.tmp").exists()
    assert "张三" in path.read_text(encoding="utf-8")
    assert file_storage.load("config.json") == data


def test_save_overwrites_previous_data(file_storage: JsonFileStorage) -> None:
    file_storage.save("config.json", {"a": 1})
    file_storage.save("config.json", {"b": 2})
    assert file_storage.load("config.json") == {"b": 2}


def test_corrupt_file_is_backed_up_and_ignored(file_storage: JsonFileStorage, storage_folder, caplog) -> None:
    caplog.set_level("WARNING", logger="cfgpanel")
    storage_folder.mkdir(parents=True)
    (storage_folder / "config.json").write_text("{not json", encoding="utf-8")

    assert file_storage.load("config.json") is None
    backups = list(storage_folder.glob("config.json.bak.*"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "{not json"
    assert "unreadable" in caplog.text


def test_non_object_root_is_rejected(file_storage: JsonFileStorage, storage_folder) -> None:
    storage_folder.mkdir(parents=True)
    (storage_folder / "config.json").write_text(json.dumps([1, 2]), encoding="utf-8")
    assert file_storage.load("config.json") is None


def test_remove(file_storage: JsonFileStorage) -> None:
    assert file_storage.remove("config.json") is False
    file_storage.save("config.json", {"a": 1})
    assert file_storage.remove("config.json") is True
    assert file_storage.load("config.json") is None


def test_default_folder_follows_environment(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("CFGPANEL_HOME", str(tmp_path / "home"))
    storage = JsonFileStorage()
    assert storage.folder == (tmp_path / "home").resolve()


def test_memory_storage_copies_data() -> None:
    storage = MemoryStorage({"config.json": {"a": {"b": 1}}})
    loaded = storage.load("config.json")
    loaded["a"]["b"] = 2
    assert storage.load("config.json") == {"a": {"b": 1}}

    data = {"x": [1]}
    storage.save("other.json", data)
    data["x"].append(2)
    assert storage.load("other.json") == {"x": [1]}


def test_memory_storage_remove() -> None:
    storage = MemoryStorage()
    assert storage.remove("config.json") is False
    storage.save("config.json", {})
    assert storage.remove("config.json") is True


def test_memory_storage_rejects_unserializable_data() -> None:
    with pytest.raises(TypeError):
        MemoryStorage().save("config.json", {"bad": object()})
