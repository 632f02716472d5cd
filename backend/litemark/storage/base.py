"""存储后端接口"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..schemas import BookmarkRecord, SettingsData


class StorageBackend(ABC):
    """
    存储后端基类

    书签整体读写；排序语义由服务层保证，后端只需原样保存 order 字段。
    """

    name: str = "base"

    async def ensure_schema(self) -> None:
        """初始化存储（可重复执行）"""

    @abstractmethod
    async def load_bookmarks(self) -> List[BookmarkRecord]:
        """读取全部书签"""

    @abstractmethod
    async def save_bookmarks(self, bookmarks: List[BookmarkRecord]) -> None:
        """保存全部书签（覆盖）"""

    @abstractmethod
    async def load_settings(self) -> Optional[SettingsData]:
        """读取站点设置，不存在时返回 None"""

    @abstractmethod
    async def save_settings(self, settings: SettingsData) -> None:
        """保存站点设置"""

    async def close(self) -> None:
        """释放资源"""
