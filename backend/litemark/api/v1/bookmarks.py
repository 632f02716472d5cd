"""书签路由"""
from fastapi import APIRouter, Depends, status
from typing import List

from ...schemas import BookmarkInput, BookmarkRecord, CategoryReorderRequest, ReorderRequest
from ...services import BookmarkService
from ..deps import get_bookmark_service, get_current_user

router = APIRouter()


@router.get("", response_model=List[BookmarkRecord])
async def get_bookmarks(service: BookmarkService = Depends(get_bookmark_service)):
    """公开书签列表（仅可见书签）"""
    return await service.list_visible()


@router.get("/all", response_model=List[BookmarkRecord])
async def get_all_bookmarks(
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """全部书签（含隐藏）"""
    return await service.list_bookmarks()


@router.post("", response_model=BookmarkRecord, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    bookmark_in: BookmarkInput,
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """创建书签"""
    return await service.create(bookmark_in)


@router.post("/reorder", response_model=List[BookmarkRecord])
async def reorder_bookmarks(
    request: ReorderRequest,
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """按书签 id 顺序重排"""
    return await service.reorder(request.order)


@router.post("/categories/reorder", response_model=List[BookmarkRecord])
async def reorder_categories(
    request: CategoryReorderRequest,
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """按分类顺序重排（空字符串表示未分类）"""
    return await service.reorder_categories(request.order)


@router.put("/{bookmark_id}", response_model=BookmarkRecord)
async def update_bookmark(
    bookmark_id: str,
    bookmark_in: BookmarkInput,
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """更新书签"""
    return await service.update(bookmark_id, bookmark_in)


@router.delete("/{bookmark_id}", response_model=BookmarkRecord)
async def delete_bookmark(
    bookmark_id: str,
    current_user: str = Depends(get_current_user),
    service: BookmarkService = Depends(get_bookmark_service)
):
    """删除书签"""
    return await service.delete(bookmark_id)
