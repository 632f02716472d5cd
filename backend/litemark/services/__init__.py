"""业务服务"""
from .backup import BackupMirror, create_backup_mirror
from .bookmarks import BookmarkService
from .settings import SettingsService
from .transfer import export_data, import_data

__all__ = [
    "BackupMirror", "create_backup_mirror",
    "BookmarkService",
    "SettingsService",
    "export_data", "import_data",
]
