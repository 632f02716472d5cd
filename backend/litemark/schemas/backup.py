"""导入导出 Schema"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from .settings import SettingsData


class ExportBookmark(BaseModel):
    """导出的书签"""
    id: str
    title: str
    url: str
    category: Optional[str] = None
    description: Optional[str] = None
    visible: bool = True


class ExportData(BaseModel):
    """导出文件格式"""
    bookmarks: List[ExportBookmark] = Field(default_factory=list)
    settings: SettingsData


class ImportBookmark(BaseModel):
    """导入的单条书签（逐条校验）"""
    id: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    visible: Optional[bool] = None


class ImportRequest(BaseModel):
    """导入请求"""
    # 书签逐条解析，单条格式错误不影响整体
    bookmarks: Optional[List[Any]] = None
    settings: Optional[Dict[str, Any]] = None
    overwrite: bool = False  # 是否先清空现有书签


class ImportResult(BaseModel):
    """导入结果"""
    success: bool = True
    imported_bookmarks: int = 0
    updated_settings: bool = False
    total_bookmarks: int = 0
    errors: Optional[List[str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
