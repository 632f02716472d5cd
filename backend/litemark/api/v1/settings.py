"""站点设置路由"""
from fastapi import APIRouter, Depends

from ...schemas import SettingsData, SettingsUpdate, ThemeUpdate
from ...services import SettingsService
from ..deps import get_current_user, get_settings_service

router = APIRouter()


@router.get("", response_model=SettingsData)
async def get_site_settings(service: SettingsService = Depends(get_settings_service)):
    """获取站点设置"""
    return await service.get()


@router.put("", response_model=SettingsData)
async def update_site_settings(
    settings_in: SettingsUpdate,
    current_user: str = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    """更新站点设置（未提供的字段保持不变）"""
    return await service.update(settings_in)


@router.put("/theme", response_model=SettingsData)
async def update_theme(
    theme_in: ThemeUpdate,
    current_user: str = Depends(get_current_user),
    service: SettingsService = Depends(get_settings_service)
):
    """切换主题"""
    return await service.update(SettingsUpdate(theme=theme_in.theme))
