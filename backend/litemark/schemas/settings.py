"""站点设置 Schema"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class SettingsData(BaseModel):
    """站点设置"""
    theme: str = "light"
    site_title: str = "个人书签"
    site_icon: str = "🔖"

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class SettingsUpdate(BaseModel):
    """部分更新，None 表示保持原值"""
    theme: Optional[str] = None
    site_title: Optional[str] = None
    site_icon: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ThemeUpdate(BaseModel):
    """切换主题"""
    theme: str
