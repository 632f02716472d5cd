"""认证路由"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ...config import Settings
from ...schemas import LoginRequest, LoginResponse
from ...utils.security import create_access_token, verify_admin_credentials
from ..deps import get_app_settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
async def login(user_in: LoginRequest, settings: Settings = Depends(get_app_settings)):
    """管理员登录"""
    if not user_in.username or not user_in.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="请输入用户名和密码"
        )

    if not verify_admin_credentials(user_in.username, user_in.password, settings):
        logger.warning(f"[Auth] 登录失败: {user_in.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="用户名或密码错误"
        )

    return LoginResponse(
        token=create_access_token(settings.ADMIN_USERNAME, settings),
        username=settings.ADMIN_USERNAME
    )
