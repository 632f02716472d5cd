"""主存储"""
from .base import StorageBackend
from .json_file import JsonFileStorage, read_json_file, write_json_file
from .database import DatabaseStorage
from ..config import Settings
from ..errors import StorageError


def create_storage(settings: Settings) -> StorageBackend:
    """根据 STORAGE_DRIVER 创建存储后端"""
    driver = settings.STORAGE_DRIVER.strip().lower()

    if driver == "json":
        return JsonFileStorage(settings.DATA_DIR)
    if driver in ("database", "db", "postgres", "sqlite"):
        from ..database import create_engine
        return DatabaseStorage(create_engine(settings.DATABASE_URL, echo=settings.DEBUG))

    raise StorageError(f"不支持的存储驱动: {settings.STORAGE_DRIVER}")


__all__ = [
    "StorageBackend",
    "JsonFileStorage",
    "DatabaseStorage",
    "create_storage",
    "read_json_file",
    "write_json_file",
]
