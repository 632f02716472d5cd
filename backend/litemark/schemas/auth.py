"""认证 Schema"""
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """管理员登录"""
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    """登录结果"""
    token: str
    username: str
