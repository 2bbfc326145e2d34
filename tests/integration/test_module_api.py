from pathlib import Path

import pytest

import record_store
from record_store import RecordStore


@pytest.fixture
def shared_store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RecordStore:
    store = RecordStore(tmp_path)
    monkeypatch.setattr(record_store, "_DEFAULT_STORE", store)
    return store


@pytest.mark.asyncio
async def test_module_functions_share_default_store(shared_store: RecordStore, tmp_path: Path) -> None:
    assert record_store.default_store() is shared_store
    await record_store.set("a", {})
    await record_store.set("b", {"n": 1})
    assert await record_store.has("a") is True
    assert sorted(await record_store.keys()) == ["a", "b"]
    assert await record_store.get_many(["a", "b"]) == {"a": {}, "b": {"n": 1}}

    await record_store.remove("a")
    assert await record_store.get("a") == {}

    await record_store.clear()
    assert await record_store.keys() == []


@pytest.mark.asyncio
async def test_module_root_directory_helpers(shared_store: RecordStore, tmp_path: Path) -> None:
    record_store.set_root_directory("nested")
    assert record_store.get_root_directory() == tmp_path / "nested"
    await record_store.set("inside", [1])
    assert (tmp_path / "nested" / "inside.json").is_file()

    target = tmp_path / "replaced"
    record_store.set_root_directory(target, replace=True)
    assert record_store.get_root_directory() == target
    assert await record_store.has("inside") is False


def test_default_store_is_created_lazily(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(record_store, "_DEFAULT_STORE", None)
    monkeypatch.setenv("RECORD_STORE_ROOT", str(tmp_path))
    store = record_store.default_store()
    assert store.get_root_directory() == tmp_path
    assert record_store.default_store() is store


@pytest.mark.asyncio
async def test_open_store_uses_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    levels: list[str] = []
    monkeypatch.setattr(record_store, "configure_logging", levels.append)
    config = tmp_path / "config.yaml"
    config.write_text(
        f"storage:\n  root: {tmp_path.as_posix()}\n  subdirectory: app\n  indent: 2\nlogging:\n  level: warning\n",
        encoding="utf-8",
    )

    store = record_store.open_store(config)

    assert levels == ["WARNING"]
    assert store.get_root_directory() == tmp_path / "app"
    await store.set("settings", {"theme": "dark"})
    assert (tmp_path / "app" / "settings.json").read_text(encoding="utf-8") == '{\n  "theme": "dark"\n}'
    assert await store.get("settings.json") == {"theme": "dark"}
