import json
from datetime import datetime, timedelta, timezone

import pytest

from litemark.config import Settings
from litemark.errors import StorageError
from litemark.schemas import BookmarkRecord, SettingsData
from litemark.storage import DatabaseStorage, JsonFileStorage, create_storage

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def record(bookmark_id, order, minutes=0, **extra):
    return BookmarkRecord(
        id=bookmark_id,
        title=bookmark_id,
        url=f"https://{bookmark_id}.test",
        order=order,
        created_at=NOW + timedelta(minutes=minutes),
        updated_at=NOW + timedelta(minutes=minutes),
        **extra,
    )


async def test_empty_storage_loads_nothing(storage):
    assert await storage.load_bookmarks() == []


async def test_save_then_load_round_trips_fields(storage):
    original = record("a", 0, category="Dev", description="desc", visible=False)

    await storage.save_bookmarks([original])
    loaded = await storage.load_bookmarks()

    assert loaded == [original]


async def test_save_replaces_whole_collection(storage):
    await storage.save_bookmarks([record("a", 0), record("b", 1), record("c", 2)])
    await storage.save_bookmarks([record("c", 0), record("d", 1)])

    loaded = await storage.load_bookmarks()

    assert sorted(b.id for b in loaded) == ["c", "d"]


async def test_ensure_schema_is_idempotent(storage):
    await storage.save_bookmarks([record("a", 0)])

    await storage.ensure_schema()
    await storage.ensure_schema()

    assert [b.id for b in await storage.load_bookmarks()] == ["a"]


async def test_settings_round_trip(storage):
    value = SettingsData(theme="dark", site_title="Links", site_icon="🔗")

    await storage.save_settings(value)

    assert await storage.load_settings() == value


async def test_database_orders_by_order_then_created_at(tmp_path):
    from litemark.database import create_engine

    backend = DatabaseStorage(create_engine(f"sqlite+aiosqlite:///{tmp_path / 'order.db'}"))
    await backend.ensure_schema()
    try:
        await backend.save_bookmarks([record("late", 1, minutes=9), record("early", 1, minutes=1), record("first", 0)])
        assert [b.id for b in await backend.load_bookmarks()] == ["first", "early", "late"]
    finally:
        await backend.close()


async def test_database_ensure_schema_seeds_default_settings(tmp_path):
    from litemark.database import create_engine

    backend = DatabaseStorage(create_engine(f"sqlite+aiosqlite:///{tmp_path / 'seed.db'}"))
    await backend.ensure_schema()
    try:
        assert await backend.load_settings() == SettingsData()
    finally:
        await backend.close()


async def test_json_missing_settings_is_none(json_storage):
    assert await json_storage.load_settings() is None


async def test_json_legacy_records_get_order_from_position(json_storage):
    json_storage.bookmarks_file.write_text(json.dumps([
        {"id": "x", "title": "X", "url": "https://x.test", "visible": True},
        {"id": "y", "title": "Y", "url": "https://y.test", "visible": True},
    ]), encoding="utf-8")

    loaded = await json_storage.load_bookmarks()

    assert [(b.id, b.order) for b in loaded] == [("x", 0), ("y", 1)]
    assert loaded[0].created_at is None


async def test_json_writes_camel_case_records(json_storage):
    await json_storage.save_bookmarks([record("a", 0)])

    raw = json.loads(json_storage.bookmarks_file.read_text(encoding="utf-8"))

    assert raw[0]["createdAt"].startswith("2024-05-01T12:00:00")
    assert "created_at" not in raw[0]


async def test_json_corrupt_file_raises_storage_error(json_storage):
    json_storage.bookmarks_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        await json_storage.load_bookmarks()


async def test_json_non_list_payload_raises_storage_error(json_storage):
    json_storage.bookmarks_file.write_text(json.dumps({"id": "a"}), encoding="utf-8")

    with pytest.raises(StorageError):
        await json_storage.load_bookmarks()


async def test_json_write_leaves_no_temp_files(json_storage):
    await json_storage.save_bookmarks([record("a", 0)])
    await json_storage.save_settings(SettingsData())

    names = sorted(p.name for p in json_storage.data_dir.iterdir())

    assert names == ["bookmarks.json", "settings.json"]


def test_create_storage_selects_backend(tmp_path):
    json_backend = create_storage(Settings(STORAGE_DRIVER="json", DATA_DIR=str(tmp_path)))
    db_backend = create_storage(Settings(
        STORAGE_DRIVER="database", DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}"
    ))

    assert isinstance(json_backend, JsonFileStorage)
    assert isinstance(db_backend, DatabaseStorage)


def test_create_storage_rejects_unknown_driver():
    with pytest.raises(StorageError):
        create_storage(Settings(STORAGE_DRIVER="redis"))
