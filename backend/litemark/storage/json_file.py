"""JSON 文件存储"""
import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

import pydantic

from .base import StorageBackend
from ..errors import StorageError
from ..schemas import BookmarkRecord, SettingsData

logger = logging.getLogger(__name__)

_MISSING = object()


def read_json_file(path: Path, default: Any = _MISSING) -> Any:
    """读取 JSON 文件，文件不存在时返回 default"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        if default is _MISSING:
            raise StorageError(f"数据文件不存在: {path.name}")
        return default
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"[JsonStorage] 读取文件失败: {path} - {e}")
        raise StorageError("无法读取数据文件") from e


def write_json_file(path: Path, data: Any) -> None:
    """原子写入 JSON 文件（先写临时文件再替换）"""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
    except OSError as e:
        logger.error(f"[JsonStorage] 写入文件失败: {path} - {e}")
        raise StorageError("无法写入数据文件") from e


class JsonFileStorage(StorageBackend):
    """
    JSON 文件存储

    bookmarks.json 与 settings.json 各保存一个完整集合，每次读写整个文件。
    """

    name = "json"

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self.bookmarks_file = self.data_dir / "bookmarks.json"
        self.settings_file = self.data_dir / "settings.json"

    async def ensure_schema(self) -> None:
        await asyncio.to_thread(self._ensure_files)

    def _ensure_files(self) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"无法创建数据目录: {self.data_dir}") from e
        if not self.bookmarks_file.exists():
            write_json_file(self.bookmarks_file, [])

    async def load_bookmarks(self) -> List[BookmarkRecord]:
        raw = await asyncio.to_thread(read_json_file, self.bookmarks_file, [])
        if not isinstance(raw, list):
            raise StorageError("书签数据格式错误")

        bookmarks = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                raise StorageError("书签数据格式错误")
            # 旧数据没有 order 字段，按数组位置补齐
            if item.get("order") is None:
                item = {**item, "order": index}
            try:
                bookmarks.append(BookmarkRecord.model_validate(item))
            except pydantic.ValidationError as e:
                raise StorageError(f"书签数据格式错误: {e.errors()[0]['msg']}") from e
        return bookmarks

    async def save_bookmarks(self, bookmarks: List[BookmarkRecord]) -> None:
        data = [bookmark.model_dump(mode="json", by_alias=True) for bookmark in bookmarks]
        await asyncio.to_thread(write_json_file, self.bookmarks_file, data)

    async def load_settings(self) -> Optional[SettingsData]:
        raw = await asyncio.to_thread(read_json_file, self.settings_file, None)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise StorageError("设置数据格式错误")
        # 非字符串字段丢弃，由默认值补齐
        cleaned = {key: value for key, value in raw.items() if isinstance(value, str)}
        return SettingsData.model_validate(cleaned)

    async def save_settings(self, settings: SettingsData) -> None:
        await asyncio.to_thread(write_json_file, self.settings_file, settings.model_dump(by_alias=True))
