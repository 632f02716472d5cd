"""
书签排序

纯函数，不做任何 IO：
- 分类归一化（None / 空串 / 空白 统一视为未分类）
- 书签全局排序与重排
- 按分类分组后整体重排
"""
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from ..schemas import BookmarkRecord

# 未分类的分组键
UNCATEGORIZED = ""

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def category_key(value: Optional[str]) -> str:
    """分类分组键，未分类统一为 UNCATEGORIZED"""
    if not isinstance(value, str):
        return UNCATEGORIZED
    return value.strip()


def normalize_category(value: Optional[str]) -> Optional[str]:
    """存储用的分类值，未分类存为 None"""
    key = category_key(value)
    return key if key != UNCATEGORIZED else None


def _sort_key(bookmark: BookmarkRecord):
    created_at = bookmark.created_at or _EPOCH
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return bookmark.order, created_at


def sort_bookmarks(bookmarks: Iterable[BookmarkRecord]) -> List[BookmarkRecord]:
    """按 (order, created_at) 稳定排序"""
    return sorted(bookmarks, key=_sort_key)


def renumber(bookmarks: Iterable[BookmarkRecord]) -> List[BookmarkRecord]:
    """按当前顺序重新编号为 0..N-1"""
    return [
        bookmark if bookmark.order == index else bookmark.model_copy(update={"order": index})
        for index, bookmark in enumerate(bookmarks)
    ]


def reorder_bookmarks(bookmarks: List[BookmarkRecord], id_sequence: Iterable[str]) -> List[BookmarkRecord]:
    """
    按给定 id 顺序重排

    Args:
        bookmarks: 已按展示顺序排好的书签
        id_sequence: 期望的 id 顺序，未知 id 忽略，重复 id 取首次出现

    Returns:
        重排并重新编号后的书签，未出现在序列中的书签保持原相对顺序排在最后
    """
    by_id = {bookmark.id: bookmark for bookmark in bookmarks}

    listed: List[BookmarkRecord] = []
    seen = set()
    for bookmark_id in id_sequence:
        if bookmark_id in by_id and bookmark_id not in seen:
            seen.add(bookmark_id)
            listed.append(by_id[bookmark_id])

    rest = [bookmark for bookmark in bookmarks if bookmark.id not in seen]
    return renumber(listed + rest)


def group_by_category(bookmarks: Iterable[BookmarkRecord]) -> Dict[str, List[BookmarkRecord]]:
    """按分类分组，分组顺序为首次出现顺序，组内保持原顺序"""
    groups: Dict[str, List[BookmarkRecord]] = {}
    for bookmark in bookmarks:
        groups.setdefault(category_key(bookmark.category), []).append(bookmark)
    return groups


def reorder_categories(bookmarks: List[BookmarkRecord], category_sequence: Iterable[Optional[str]]) -> List[BookmarkRecord]:
    """
    按分类整体重排

    请求中的分类归一化、去重并过滤掉不存在的分类，其余分类按首次出现顺序
    追加在后。组内顺序不变，最后整体重新编号。
    """
    groups = group_by_category(bookmarks)

    target: List[str] = []
    for value in category_sequence:
        key = category_key(value)
        if key in groups and key not in target:
            target.append(key)
    for key in groups:
        if key not in target:
            target.append(key)

    reordered: List[BookmarkRecord] = []
    for key in target:
        reordered.extend(groups[key])
    return renumber(reordered)
