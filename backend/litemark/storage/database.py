"""数据库存储（SQLite / PostgreSQL）"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from .base import StorageBackend
from ..database import create_session_factory, init_db
from ..errors import StorageError
from ..models import Bookmark, SiteSetting
from ..models.setting import DEFAULT_SETTINGS_ID
from ..schemas import BookmarkRecord, SettingsData

logger = logging.getLogger(__name__)


def _to_db_time(value: Optional[datetime]) -> Optional[datetime]:
    """转为 naive UTC"""
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _from_db_time(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(row: Bookmark) -> BookmarkRecord:
    return BookmarkRecord(
        id=row.id,
        title=row.title,
        url=row.url,
        category=row.category,
        description=row.description,
        visible=bool(row.visible),
        order=row.sort_order or 0,
        created_at=_from_db_time(row.created_at),
        updated_at=_from_db_time(row.updated_at),
    )


def _to_row(record: BookmarkRecord) -> Bookmark:
    return Bookmark(
        id=record.id,
        title=record.title,
        url=record.url,
        category=record.category,
        description=record.description,
        visible=record.visible,
        sort_order=record.order,
        created_at=_to_db_time(record.created_at),
        updated_at=_to_db_time(record.updated_at),
    )


class DatabaseStorage(StorageBackend):
    """
    数据库存储

    书签按行 upsert/删除，order 作为整数列保存，
    读取时 ORDER BY "order" ASC, created_at ASC。
    """

    name = "database"

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = create_session_factory(engine)

    async def ensure_schema(self) -> None:
        try:
            await init_db(self.engine)
            async with self.session_factory() as session:
                async with session.begin():
                    if await session.get(SiteSetting, DEFAULT_SETTINGS_ID) is None:
                        defaults = SettingsData()
                        session.add(SiteSetting(
                            id=DEFAULT_SETTINGS_ID,
                            theme=defaults.theme,
                            site_title=defaults.site_title,
                            site_icon=defaults.site_icon,
                        ))
        except SQLAlchemyError as e:
            logger.error(f"[DatabaseStorage] 初始化数据库表失败: {e}")
            raise StorageError("初始化数据库失败") from e

    async def load_bookmarks(self) -> List[BookmarkRecord]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Bookmark).order_by(Bookmark.sort_order.asc(), Bookmark.created_at.asc())
                )
                return [_to_record(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"[DatabaseStorage] 读取书签失败: {e}")
            raise StorageError("读取书签失败") from e

    async def save_bookmarks(self, bookmarks: List[BookmarkRecord]) -> None:
        keep_ids = [bookmark.id for bookmark in bookmarks]
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    stmt = delete(Bookmark)
                    if keep_ids:
                        stmt = stmt.where(Bookmark.id.not_in(keep_ids))
                    await session.execute(stmt)

                    for bookmark in bookmarks:
                        await session.merge(_to_row(bookmark))
        except SQLAlchemyError as e:
            logger.error(f"[DatabaseStorage] 写入书签失败: {e}")
            raise StorageError("写入书签失败") from e

    async def load_settings(self) -> Optional[SettingsData]:
        try:
            async with self.session_factory() as session:
                row = await session.get(SiteSetting, DEFAULT_SETTINGS_ID)
        except SQLAlchemyError as e:
            logger.error(f"[DatabaseStorage] 读取设置失败: {e}")
            raise StorageError("读取设置失败") from e

        if row is None:
            return None
        defaults = SettingsData()
        return SettingsData(
            theme=row.theme or defaults.theme,
            site_title=row.site_title or defaults.site_title,
            site_icon=row.site_icon if row.site_icon is not None else defaults.site_icon,
        )

    async def save_settings(self, settings: SettingsData) -> None:
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    await session.merge(SiteSetting(
                        id=DEFAULT_SETTINGS_ID,
                        theme=settings.theme,
                        site_title=settings.site_title,
                        site_icon=settings.site_icon,
                        updated_at=datetime.utcnow(),
                    ))
        except SQLAlchemyError as e:
            logger.error(f"[DatabaseStorage] 写入设置失败: {e}")
            raise StorageError("写入设置失败") from e

    async def close(self) -> None:
        await self.engine.dispose()
