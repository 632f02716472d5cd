"""工具函数"""
from .security import create_access_token, decode_token, verify_admin_credentials

__all__ = [
    "create_access_token", "decode_token", "verify_admin_credentials",
]
