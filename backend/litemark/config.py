"""应用配置"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from pathlib import Path
import os

# 确定项目根目录（支持本地开发和 Docker 部署）
# 本地开发: backend/litemark/config.py -> 项目根目录是 ../../
# Docker: /app/litemark/config.py -> 数据目录是 /app/data
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent  # backend 目录
_project_root = _backend_dir.parent  # 项目根目录

# 检测运行环境
if os.path.exists("/app/data"):
    # Docker 环境
    _data_dir = Path("/app/data")
    _env_file = Path("/app/.env") if Path("/app/.env").exists() else None
else:
    # 本地开发环境
    _data_dir = _project_root / "data"
    _env_file = _project_root / ".env" if (_project_root / ".env").exists() else None


class Settings(BaseSettings):
    """应用设置"""
    # 应用
    APP_NAME: str = "LiteMark"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 主存储: json（文件）或 database（SQLAlchemy）
    STORAGE_DRIVER: str = "json"
    DATA_DIR: str = str(_data_dir)
    DATABASE_URL: str = f"sqlite+aiosqlite:///{_data_dir}/litemark.db"

    # 备份存储: none / json / http
    BACKUP_STORAGE_DRIVER: str = "none"
    BACKUP_DIR: Optional[str] = None  # json 备份目录
    BACKUP_URL: Optional[str] = None  # http 备份地址（PUT <url>/<key>.json）
    BACKUP_TOKEN: Optional[str] = None
    BACKUP_TIMEOUT: float = 10.0

    # JWT
    JWT_SECRET_KEY: str = "change-this-secret-key-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 天

    # 管理员账号
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin123"

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:5173",
        "https://localhost",
    ]

    # 前端构建产物（存在时由后端直接托管）
    FRONTEND_DIST: Optional[str] = None

    # 日志
    LOG_FILE: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(_env_file) if _env_file else ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
