"""书签相关 Schema"""
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional


class BookmarkInput(BaseModel):
    """创建/更新书签（字段在服务层清洗与校验）"""
    title: str = ""
    url: str = ""
    category: Optional[str] = None
    description: Optional[str] = None
    visible: Optional[bool] = None


class BookmarkRecord(BaseModel):
    """书签记录，同时用作存储格式与响应"""
    id: str
    title: str
    url: str
    category: Optional[str] = None
    description: Optional[str] = None
    visible: bool = True
    order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ReorderRequest(BaseModel):
    """排序请求：书签 id 或分类名（空字符串表示未分类）"""
    order: List[str] = Field(default_factory=list)


class CategoryReorderRequest(BaseModel):
    """分类排序请求：空字符串或 null 表示未分类"""
    order: List[Optional[str]] = Field(default_factory=list)
