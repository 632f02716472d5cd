"""测试共用夹具：存储后端、服务与内存备份写入器"""

import asyncio

import pytest

from litemark.database import create_engine
from litemark.errors import BackupError
from litemark.services import BackupMirror, BookmarkService, SettingsService
from litemark.services.backup import BackupWriter
from litemark.storage import DatabaseStorage, JsonFileStorage


class RecordingWriter(BackupWriter):
    """把每次备份记录在内存中；fail=True 时每次写入都失败，first_delay 让第一次写入变慢"""

    name = "memory"

    def __init__(self, fail: bool = False, first_delay: float = 0):
        self.fail = fail
        self.first_delay = first_delay
        self.writes = []

    async def write(self, key, data):
        if self.fail:
            raise BackupError("backup store unavailable")
        if self.first_delay and not self.writes:
            delay, self.first_delay = self.first_delay, 0
            await asyncio.sleep(delay)
        self.writes.append((key, data))

    def last(self, key):
        for written_key, data in reversed(self.writes):
            if written_key == key:
                return data
        return None


def make_storage(kind, tmp_path):
    if kind == "json":
        return JsonFileStorage(str(tmp_path / "data"))
    return DatabaseStorage(create_engine(f"sqlite+aiosqlite:///{tmp_path / 'db' / 'litemark.db'}"))


@pytest.fixture(params=["json", "database"])
async def storage(request, tmp_path):
    backend = make_storage(request.param, tmp_path)
    await backend.ensure_schema()
    yield backend
    await backend.close()


@pytest.fixture
async def json_storage(tmp_path):
    backend = make_storage("json", tmp_path)
    await backend.ensure_schema()
    yield backend
    await backend.close()


@pytest.fixture
def writer():
    return RecordingWriter()


@pytest.fixture
async def mirror(writer):
    backup = BackupMirror(writer)
    yield backup
    await backup.drain()


@pytest.fixture
def bookmark_service(storage, mirror):
    return BookmarkService(storage, mirror)


@pytest.fixture
def settings_service(storage, mirror):
    return SettingsService(storage, mirror)


@pytest.fixture
async def failing_mirror():
    backup = BackupMirror(RecordingWriter(fail=True))
    yield backup
    await backup.drain()


@pytest.fixture
def slow_first_writer():
    return RecordingWriter(first_delay=0.05)
