"""数据模型"""
from .bookmark import Bookmark
from .setting import SiteSetting

__all__ = [
    "Bookmark",
    "SiteSetting",
]
