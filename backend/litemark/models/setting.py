"""站点设置模型"""
from sqlalchemy import Column, String, DateTime
from datetime import datetime

from ..database import Base

DEFAULT_SETTINGS_ID = "default"


class SiteSetting(Base):
    """站点设置表（只有 id=default 一行）"""
    __tablename__ = "settings"

    id = Column(String(36), primary_key=True, default=DEFAULT_SETTINGS_ID)
    theme = Column(String(32), nullable=False, default="light")
    site_title = Column(String(60), nullable=False, default="个人书签")
    site_icon = Column(String(512), nullable=False, default="🔖")
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
