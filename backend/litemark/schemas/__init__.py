"""Pydantic Schemas"""
from .bookmark import BookmarkInput, BookmarkRecord, CategoryReorderRequest, ReorderRequest
from .settings import SettingsData, SettingsUpdate, ThemeUpdate
from .backup import ExportBookmark, ExportData, ImportBookmark, ImportRequest, ImportResult
from .auth import LoginRequest, LoginResponse

__all__ = [
    "BookmarkInput", "BookmarkRecord", "CategoryReorderRequest", "ReorderRequest",
    "SettingsData", "SettingsUpdate", "ThemeUpdate",
    "ExportBookmark", "ExportData", "ImportBookmark", "ImportRequest", "ImportResult",
    "LoginRequest", "LoginResponse",
]
