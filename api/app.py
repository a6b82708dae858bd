"""
FastAPI application for the quote API.
Main application entry point for the API server.
"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from quotes import QuoteCatalog, QuoteSelector
from utils import (
    ApiConfig,
    UnifiedConfigManager,
    api_logger,
    get_config_manager,
    initialize_logging,
    logging_manager,
)

from .middleware import setup_middleware
from .routes import add_health_route, add_quote_route

API_VERSION = "1.0.0"


def build_selector(config: Optional[UnifiedConfigManager] = None) -> QuoteSelector:
    """根据配置构建选择器，空目录在此处抛出 CatalogError"""
    config = config or get_config_manager()
    quote_config = config.get_quote_config()
    catalog = QuoteCatalog.from_config(quote_config)
    return QuoteSelector(catalog, seed=quote_config.seed)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    api_logger.info(
        f"[API] Starting Quote API with {len(app.state.selector.catalog)} quotes..."
    )
    yield
    api_logger.info(
        f"[API] Shutting down Quote API after {app.state.selector.draws} quotes served, "
        f"{logging_manager.get_metrics().get('API.errors', 0)} errors"
    )


def create_app(selector: Optional[QuoteSelector] = None,
               api_config: Optional[ApiConfig] = None,
               config: Optional[UnifiedConfigManager] = None) -> FastAPI:
    """创建FastAPI应用

    选择器在创建时构建，目录为空时直接失败，不会开始服务。
    """
    if selector is None:
        selector = build_selector(config)
    if api_config is None:
        api_config = (config or get_config_manager()).get_api_config()

    # 文档路由默认关闭，保证所有路径都返回语录
    docs_enabled = api_config.docs_enabled
    app = FastAPI(
        title="Quote API",
        description="Returns a random quote as JSON",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan
    )
    app.state.selector = selector

    setup_middleware(app)

    if api_config.health_path:
        add_health_route(app, api_config.health_path, API_VERSION)
        api_logger.info(f"[API] Health check enabled at {api_config.health_path}")

    # catch-all 路由必须最后注册
    add_quote_route(app)

    return app


def app_factory() -> FastAPI:
    """uvicorn 工厂入口，多进程模式下每个工作进程各自构建应用"""
    initialize_logging()
    return create_app()


if __name__ == "__main__":
    initialize_logging()
    api_config = get_config_manager().get_api_config()
    api_logger.info(f"[API] Starting server on {api_config.host}:{api_config.port}")

    uvicorn.run(
        "api.app:app_factory",
        factory=True,
        host=api_config.host,
        port=api_config.port,
        reload=api_config.reload,
        workers=api_config.workers,
        log_level="info"
    )
