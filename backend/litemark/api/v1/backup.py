"""备份导入导出路由"""
from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...schemas import ImportRequest, ImportResult
from ...services import BookmarkService, SettingsService, export_data, import_data
from ..deps import get_bookmark_service, get_current_user, get_settings_service

router = APIRouter()


@router.get("/export")
async def export_backup(
    current_user: str = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    settings: SettingsService = Depends(get_settings_service)
):
    """导出书签与设置（作为附件下载）"""
    data = await export_data(bookmarks, settings)
    filename = f"litemark-backup-{date.today().isoformat()}.json"
    return JSONResponse(
        content=data.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult, response_model_exclude_none=True)
async def import_backup(
    request: ImportRequest,
    current_user: str = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    settings: SettingsService = Depends(get_settings_service)
):
    """导入书签与设置，单条失败不影响其余数据"""
    return await import_data(request, bookmarks, settings)
