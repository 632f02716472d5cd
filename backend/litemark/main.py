"""FastAPI 应用入口"""
import logging
import logging.config
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .errors import NotFoundError, StorageError, ValidationError
from .api import api_router
from .services import BookmarkService, SettingsService, create_backup_mirror
from .storage import create_storage

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    """日志配置（设置 LOG_FILE 时额外写入文件）"""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        }
    }
    if settings.LOG_FILE:
        os.makedirs(os.path.dirname(os.path.abspath(settings.LOG_FILE)), exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "filename": settings.LOG_FILE,
            "mode": "a",
            "encoding": "utf-8"
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(levelname)s:%(name)s:%(message)s"}
        },
        "handlers": handlers,
        "root": {
            "level": settings.LOG_LEVEL,
            "handlers": list(handlers),
        },
        "loggers": {
            "litemark": {"level": settings.LOG_LEVEL},
            "httpx": {"level": "WARNING"},
        }
    })


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings: Settings = app.state.settings

    # 启动时：初始化存储（只执行一次）
    storage = create_storage(settings)
    await storage.ensure_schema()
    mirror = create_backup_mirror(settings)

    app.state.storage = storage
    app.state.backup_mirror = mirror
    app.state.bookmark_service = BookmarkService(storage, mirror)
    app.state.settings_service = SettingsService(storage, mirror)

    logger.info(
        f"🚀 {settings.APP_NAME} v{settings.APP_VERSION} 启动成功 "
        f"(存储: {storage.name}, 备份: {mirror.writer.name if mirror.enabled else 'none'})"
    )
    yield
    # 关闭时：等待未完成的备份
    logger.info("👋 正在清理资源...")
    try:
        await mirror.close()
    except Exception as e:
        logger.warning(f"⚠️ 关闭备份客户端失败: {e}")
    await storage.close()
    logger.info("👋 应用关闭完成")


def register_exception_handlers(app: FastAPI):
    """业务异常 -> HTTP 响应"""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"[Storage] {request.method} {request.url.path} 失败: {exc.message}")
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": exc.message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """创建应用"""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="个人书签 API",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS 配置
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # API 响应禁止缓存；CORS 预检成功时返回 204
    @app.middleware("http")
    async def no_cache_middleware(request: Request, call_next):
        response = await call_next(request)
        if (
            request.method == "OPTIONS"
            and "access-control-request-method" in request.headers
            and response.status_code == status.HTTP_200_OK
        ):
            headers = {
                key: value for key, value in response.headers.items()
                if key.lower() not in ("content-length", "content-type")
            }
            response = Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"
            response.headers["Pragma"] = "no-cache"
        return response

    register_exception_handlers(app)

    # 健康检查
    @app.get("/api/health", tags=["系统"], summary="健康检查")
    async def health_check():
        """检查服务运行状态"""
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION
        }

    # 注册路由
    app.include_router(api_router, prefix="/api")

    # 前端静态文件（放在最后，避免覆盖 /api）
    if settings.FRONTEND_DIST and os.path.isdir(settings.FRONTEND_DIST):
        app.mount("/", StaticFiles(directory=settings.FRONTEND_DIST, html=True), name="frontend")

    return app


configure_logging(get_settings())
app = create_app()
