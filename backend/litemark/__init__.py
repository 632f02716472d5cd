"""LiteMark 个人书签服务"""

__version__ = "1.0.0"
