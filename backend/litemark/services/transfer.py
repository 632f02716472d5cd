"""书签导入导出"""
import logging
from typing import List

import pydantic

from .bookmarks import BookmarkService
from .settings import SettingsService
from ..errors import LiteMarkError, ValidationError
from ..schemas import (
    BookmarkInput,
    ExportBookmark,
    ExportData,
    ImportBookmark,
    ImportRequest,
    ImportResult,
    SettingsUpdate,
)

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = {"theme": "theme", "siteTitle": "site_title", "siteIcon": "site_icon"}


async def export_data(bookmarks: BookmarkService, settings: SettingsService) -> ExportData:
    """导出全部书签与站点设置"""
    records = await bookmarks.list_bookmarks()
    return ExportData(
        bookmarks=[
            ExportBookmark(
                id=record.id,
                title=record.title,
                url=record.url,
                category=record.category,
                description=record.description,
                visible=record.visible,
            )
            for record in records
        ],
        settings=await settings.get(),
    )


async def import_data(
    request: ImportRequest,
    bookmarks: BookmarkService,
    settings: SettingsService,
) -> ImportResult:
    """
    导入书签与设置

    尽力而为：单条书签或设置导入失败只记录到 errors，不中断整体导入。
    overwrite=True 且提供了书签时，先清空现有书签。
    """
    if request.bookmarks is None and request.settings is None:
        raise ValidationError("导入数据不能为空，至少需要包含 bookmarks 或 settings")

    result = ImportResult(total_bookmarks=len(request.bookmarks or []))
    errors: List[str] = []

    if request.overwrite and request.bookmarks is not None:
        try:
            removed = await bookmarks.clear()
            logger.info(f"[Import] 覆盖导入，已清除 {removed} 条书签")
        except LiteMarkError as e:
            errors.append(f"清除现有书签失败：{e.message}")

    for item in request.bookmarks or []:
        try:
            data = ImportBookmark.model_validate(item)
        except pydantic.ValidationError:
            errors.append("跳过无效书签：数据格式错误")
            continue

        if not (data.title or "").strip() or not (data.url or "").strip():
            errors.append("跳过无效书签：标题或链接为空")
            continue

        try:
            await bookmarks.create(BookmarkInput(
                title=data.title,
                url=data.url,
                category=data.category,
                description=data.description,
                visible=data.visible if data.visible is not None else True,
            ))
            result.imported_bookmarks += 1
        except LiteMarkError as e:
            errors.append(f"导入书签 \"{data.title or data.url}\" 失败：{e.message}")

    if request.settings:
        updates = {
            field: request.settings[key]
            for key, field in SETTINGS_FIELDS.items()
            if isinstance(request.settings.get(key), str) and request.settings[key]
        }
        if updates:
            try:
                await settings.update(SettingsUpdate(**updates))
                result.updated_settings = True
            except LiteMarkError as e:
                errors.append(f"导入设置失败：{e.message}")

    result.errors = errors or None
    logger.info(
        f"[Import] 导入完成: {result.imported_bookmarks}/{result.total_bookmarks} 条书签, "
        f"设置更新: {result.updated_settings}, 错误: {len(errors)}"
    )
    return result
