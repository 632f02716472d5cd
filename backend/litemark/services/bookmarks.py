"""书签服务"""
import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .backup import BackupMirror
from .ordering import normalize_category, reorder_bookmarks, reorder_categories, sort_bookmarks
from ..errors import NotFoundError, ValidationError
from ..schemas import BookmarkInput, BookmarkRecord
from ..storage import StorageBackend


_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """去除首尾空白，空字符串视为 None"""
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def sanitize_url(value: Optional[str]) -> str:
    """只接受 http/https，其他输入一律加上 https:// 前缀"""
    trimmed = str(value or "").strip()
    if not trimmed:
        return ""
    if _SCHEME_RE.match(trimmed):
        return trimmed
    return f"https://{trimmed}"


def _validate(data: BookmarkInput) -> tuple[str, str]:
    title = sanitize_text(data.title)
    url = sanitize_url(data.url)
    if not title or not url:
        raise ValidationError("标题和链接不能为空")
    return title, url


class BookmarkService:
    """
    书签增删改查与排序

    每个写操作都是 读取 -> 修改 -> 整体写回 -> 调度备份，
    校验失败或记录不存在时不做任何写入。
    """

    def __init__(self, storage: StorageBackend, mirror: Optional[BackupMirror] = None):
        self.storage = storage
        self.mirror = mirror or BackupMirror()

    async def list_bookmarks(self) -> List[BookmarkRecord]:
        """全部书签，按 (order, created_at) 排序"""
        return sort_bookmarks(await self.storage.load_bookmarks())

    async def list_visible(self) -> List[BookmarkRecord]:
        """公开展示的书签"""
        return [bookmark for bookmark in await self.list_bookmarks() if bookmark.visible]

    async def create(self, data: BookmarkInput) -> BookmarkRecord:
        title, url = _validate(data)
        bookmarks = await self.list_bookmarks()

        now = datetime.now(timezone.utc)
        bookmark = BookmarkRecord(
            id=str(uuid.uuid4()),
            title=title,
            url=url,
            category=normalize_category(data.category),
            description=sanitize_text(data.description),
            visible=data.visible if data.visible is not None else True,
            order=max((b.order for b in bookmarks), default=-1) + 1,
            created_at=now,
            updated_at=now,
        )
        bookmarks.append(bookmark)
        await self._save(bookmarks)
        return bookmark

    async def update(self, bookmark_id: str, data: BookmarkInput) -> BookmarkRecord:
        title, url = _validate(data)
        bookmarks = await self.list_bookmarks()

        index = _find_index(bookmarks, bookmark_id)
        existing = bookmarks[index]
        updated = existing.model_copy(update={
            "title": title,
            "url": url,
            "category": normalize_category(data.category),
            "description": sanitize_text(data.description),
            "visible": data.visible if data.visible is not None else existing.visible,
            "updated_at": datetime.now(timezone.utc),
        })
        bookmarks[index] = updated
        await self._save(bookmarks)
        return updated

    async def delete(self, bookmark_id: str) -> BookmarkRecord:
        """删除书签，其余书签的 order 不重新编号"""
        bookmarks = await self.list_bookmarks()

        index = _find_index(bookmarks, bookmark_id)
        removed = bookmarks.pop(index)
        await self._save(bookmarks)
        return removed

    async def clear(self) -> int:
        """删除全部书签，返回删除数量"""
        bookmarks = await self.storage.load_bookmarks()
        await self._save([])
        return len(bookmarks)

    async def reorder(self, id_sequence: Iterable[str]) -> List[BookmarkRecord]:
        bookmarks = reorder_bookmarks(await self.list_bookmarks(), id_sequence)
        await self._save(bookmarks)
        return bookmarks

    async def reorder_categories(self, category_sequence: Iterable[Optional[str]]) -> List[BookmarkRecord]:
        bookmarks = reorder_categories(await self.list_bookmarks(), category_sequence)
        await self._save(bookmarks)
        return bookmarks

    async def _save(self, bookmarks: List[BookmarkRecord]) -> None:
        await self.storage.save_bookmarks(bookmarks)
        self.mirror.mirror("bookmarks", bookmarks)


def _find_index(bookmarks: List[BookmarkRecord], bookmark_id: str) -> int:
    for index, bookmark in enumerate(bookmarks):
        if bookmark.id == bookmark_id:
            return index
    raise NotFoundError("未找到指定书签")
