"""
备份镜像

每次写入成功后，把完整集合异步写一份到备份存储：
- 不阻塞请求，写入在后台任务中完成
- 失败只记录日志，不影响主流程
"""
import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..config import Settings
from ..errors import BackupError
from ..storage.json_file import write_json_file

logger = logging.getLogger(__name__)


class BackupWriter:
    """备份写入器基类"""

    name = "base"

    async def write(self, key: str, data: Any) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class JsonDirectoryWriter(BackupWriter):
    """备份到本地目录 <dir>/<key>.json"""

    name = "json"

    def __init__(self, directory: str):
        self.directory = Path(directory)

    async def write(self, key: str, data: Any) -> None:
        try:
            await asyncio.to_thread(write_json_file, self.directory / f"{key}.json", data)
        except Exception as e:
            raise BackupError(f"写入备份文件失败: {e}") from e


class HttpBlobWriter(BackupWriter):
    """备份到 HTTP 对象存储（PUT <base_url>/<key>.json）"""

    name = "http"

    def __init__(self, base_url: str, token: Optional[str] = None, timeout: float = 10.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json; charset=utf-8"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)

    async def write(self, key: str, data: Any) -> None:
        url = f"{self.base_url}/{key}.json"
        try:
            response = await self._client.put(url, json=data)
        except httpx.HTTPError as e:
            raise BackupError(f"备份请求失败: {e}") from e
        if response.status_code >= 300:
            raise BackupError(f"备份存储返回状态码: {response.status_code}")

    async def close(self) -> None:
        if not self._client.is_closed:
            await self._client.aclose()


class BackupMirror:
    """
    备份镜像

    mirror() 立即序列化数据，记为该 key 的最新快照。每个 key 同时只有一个
    后台任务按顺序写入；写入期间到达的多个快照只保留最后一个，
    所以备份最终一定是最新集合。drain() 等待所有未完成的备份（关闭时调用）。
    """

    def __init__(self, writer: Optional[BackupWriter] = None):
        self.writer = writer
        self._latest: Dict[str, Any] = {}
        self._workers: Dict[str, asyncio.Task] = {}

    @property
    def enabled(self) -> bool:
        return self.writer is not None

    def mirror(self, key: str, payload: Any) -> None:
        """调度一次备份，未配置备份时直接跳过"""
        if self.writer is None:
            return

        try:
            data = _to_jsonable(payload)
        except Exception as e:
            logger.error(f"[Backup] 序列化 {key} 失败: {e}")
            return

        self._latest[key] = data
        if key not in self._workers:
            self._workers[key] = asyncio.create_task(self._run(key))

    async def _run(self, key: str) -> None:
        try:
            while key in self._latest:
                await self._write(key, self._latest.pop(key))
        finally:
            # 与循环退出在同一步内注销，之后的 mirror() 会启动新任务
            self._workers.pop(key, None)

    async def _write(self, key: str, data: Any) -> None:
        try:
            await self.writer.write(key, data)
            logger.info(f"[Backup] 已备份 {key} -> {self.writer.name}")
        except BackupError as e:
            logger.error(f"[Backup] 备份 {key} 到存储失败: {e}")
        except Exception as e:
            logger.exception(f"[Backup] 备份 {key} 时发生未知错误: {e}")

    @property
    def pending(self) -> int:
        return len(self._workers)

    async def drain(self) -> None:
        """等待所有后台备份完成"""
        while self._workers:
            await asyncio.gather(*list(self._workers.values()), return_exceptions=True)

    async def close(self) -> None:
        await self.drain()
        if self.writer is not None:
            await self.writer.close()


def _to_jsonable(payload: Any) -> Any:
    """把 pydantic 模型（或其列表）转为可 JSON 序列化的数据"""
    if hasattr(payload, "model_dump"):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, (list, tuple)):
        return [_to_jsonable(item) for item in payload]
    return payload


def create_backup_mirror(settings: Settings) -> BackupMirror:
    """根据 BACKUP_STORAGE_DRIVER 创建备份镜像"""
    driver = (settings.BACKUP_STORAGE_DRIVER or "none").strip().lower()

    if driver in ("", "none"):
        return BackupMirror()

    if driver == "json":
        if not settings.BACKUP_DIR:
            logger.warning("[Backup] 未配置 BACKUP_DIR，备份已禁用")
            return BackupMirror()
        return BackupMirror(JsonDirectoryWriter(settings.BACKUP_DIR))

    if driver == "http":
        if not settings.BACKUP_URL:
            logger.warning("[Backup] 未配置 BACKUP_URL，备份已禁用")
            return BackupMirror()
        return BackupMirror(HttpBlobWriter(settings.BACKUP_URL, settings.BACKUP_TOKEN, settings.BACKUP_TIMEOUT))

    logger.warning(f"[Backup] 不支持的备份驱动: {driver}，备份已禁用")
    return BackupMirror()
