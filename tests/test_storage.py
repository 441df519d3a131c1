from vetclinic_client.storage import FileStorage, MemoryStorage


def test_memory_storage_round_trip():
    storage = MemoryStorage()
    storage.set("user", "{}")
    storage.remove("missing")

    assert storage.get("user") == "{}"
    assert storage.keys() == ["user"]

    storage.remove("user")
    assert storage.get("user") is None


def test_file_storage_survives_reopen(tmp_path):
    path = tmp_path / "nested" / "session.json"
    storage = FileStorage(str(path))

    assert storage.get("access_token") is None
    storage.set("access_token", "abc")
    storage.set("user", '{"id": "u-1"}')

    reopened = FileStorage(str(path))
    assert reopened.get("access_token") == "abc"
    assert sorted(reopened.keys()) == ["access_token", "user"]

    reopened.remove("access_token")
    assert FileStorage(str(path)).keys() == ["user"]


def test_file_storage_treats_corrupt_file_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{{{", encoding="utf-8")

    storage = FileStorage(str(path))

    assert storage.keys() == []
    storage.set("user", "{}")
    assert storage.get("user") == "{}"
