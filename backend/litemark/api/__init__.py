"""API 路由"""
from fastapi import APIRouter
from .v1 import auth, bookmarks, settings, backup

api_router = APIRouter()

# 注册路由
api_router.include_router(auth.router, prefix="/auth", tags=["认证"])
api_router.include_router(bookmarks.router, prefix="/bookmarks", tags=["书签"])
api_router.include_router(settings.router, prefix="/settings", tags=["设置"])
api_router.include_router(backup.router, prefix="/backup", tags=["备份"])
