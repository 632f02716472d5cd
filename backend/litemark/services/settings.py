"""站点设置服务"""
import logging
from typing import Optional

from .backup import BackupMirror
from ..errors import ValidationError
from ..schemas import SettingsData, SettingsUpdate
from ..storage import StorageBackend

logger = logging.getLogger(__name__)

THEMES = ("light", "twilight", "dark")
DEFAULT_SETTINGS = SettingsData(theme=THEMES[0], site_title="个人书签", site_icon="🔖")

SITE_TITLE_MAX_LENGTH = 60
SITE_ICON_MAX_LENGTH = 512


def sanitize_settings(value: Optional[SettingsData]) -> SettingsData:
    """读取时清洗：未知主题重置为默认主题，缺失字段使用默认值"""
    if value is None:
        return DEFAULT_SETTINGS.model_copy()
    return SettingsData(
        theme=value.theme if value.theme in THEMES else DEFAULT_SETTINGS.theme,
        site_title=(value.site_title or "").strip() or DEFAULT_SETTINGS.site_title,
        site_icon=value.site_icon if value.site_icon is not None else DEFAULT_SETTINGS.site_icon,
    )


def merge_settings(current: SettingsData, update: SettingsUpdate) -> SettingsData:
    """逐字段合并，None 表示保持原值"""
    return SettingsData(
        theme=update.theme.strip() if update.theme is not None else current.theme,
        site_title=update.site_title.strip() if update.site_title is not None else current.site_title,
        site_icon=update.site_icon.strip() if update.site_icon is not None else current.site_icon,
    )


def validate_settings(value: SettingsData) -> None:
    if value.theme not in THEMES:
        raise ValidationError("无效的主题")
    if not value.site_title:
        raise ValidationError("站点标题不能为空")
    if len(value.site_title) > SITE_TITLE_MAX_LENGTH:
        raise ValidationError(f"站点标题不能超过 {SITE_TITLE_MAX_LENGTH} 个字符")
    if len(value.site_icon) > SITE_ICON_MAX_LENGTH:
        raise ValidationError(f"站点图标不能超过 {SITE_ICON_MAX_LENGTH} 个字符")


class SettingsService:
    """站点设置（单例记录，首次读取时以默认值创建）"""

    def __init__(self, storage: StorageBackend, mirror: Optional[BackupMirror] = None):
        self.storage = storage
        self.mirror = mirror or BackupMirror()

    async def get(self) -> SettingsData:
        stored = await self.storage.load_settings()
        if stored is None:
            logger.info("[Settings] 未找到站点设置，写入默认值")
            await self._save(DEFAULT_SETTINGS)
        return sanitize_settings(stored)

    async def update(self, update: SettingsUpdate) -> SettingsData:
        merged = merge_settings(await self.get(), update)
        validate_settings(merged)
        await self._save(merged)
        return merged

    async def _save(self, value: SettingsData) -> None:
        await self.storage.save_settings(value)
        self.mirror.mirror("settings", value)
