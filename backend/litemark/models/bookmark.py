"""书签模型"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Integer
from datetime import datetime
import uuid

from ..database import Base


class Bookmark(Base):
    """书签表"""
    __tablename__ = "bookmarks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    url = Column(String(2000), nullable=False)
    category = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    visible = Column(Boolean, nullable=False, default=True)
    sort_order = Column("order", Integer, nullable=False, default=0)
    # 以 naive UTC 存储，读出时补上时区
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
