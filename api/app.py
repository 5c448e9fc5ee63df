"""
FastAPI application for the quote server.
Application factory, plus a module-level app for running under
``uvicorn api.app:app`` directly.
"""

from contextlib import asynccontextmanager
from typing import Optional

import anyio.to_thread
from fastapi import FastAPI

from homepage import QuoteStore, PageRenderer
from utils import api_logger, config_manager, resolve_project_path, UnifiedConfigManager

from .routes import router
from .middleware import setup_middleware


def load_quote_store(config: Optional[UnifiedConfigManager] = None) -> QuoteStore:
    """按资源配置加载名言列表，列表为空或文件不存在时抛出 QuoteStoreError"""
    resources_config = (config or config_manager).get_resources_config()
    return QuoteStore.from_file(
        resolve_project_path(resources_config.directory) / resources_config.quotes_file,
        encoding=resources_config.quotes_encoding
    )


def create_app(quote_store: Optional[QuoteStore] = None,
               page_renderer: Optional[PageRenderer] = None,
               workers: Optional[int] = None,
               config: Optional[UnifiedConfigManager] = None) -> FastAPI:
    """创建应用；未注入的组件按配置从资源目录加载"""
    config = config or config_manager
    resources_config = config.get_resources_config()
    resources_dir = resolve_project_path(resources_config.directory)
    worker_count = workers or config.get_server_config().workers

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """应用生命周期管理"""
        api_logger.info("[API] Starting Quote Server...")

        # 同步处理函数运行在 anyio 线程池中，限制为固定的工作线程数
        anyio.to_thread.current_default_thread_limiter().total_tokens = worker_count
        api_logger.info(f"[API] Worker pool size: {worker_count}")

        # 名言列表为空或不存在时直接启动失败
        if app.state.quote_store is None:
            app.state.quote_store = load_quote_store(config)

        yield

        api_logger.info("[API] Shutting down Quote Server...")

    app = FastAPI(
        title="Quote Server",
        description="Serves a random quote and the server hostname",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan
    )

    app.state.quote_store = quote_store
    app.state.page_renderer = page_renderer or PageRenderer(resources_dir / resources_config.html_page)

    setup_middleware(app)
    app.include_router(router)

    return app


app = create_app()
