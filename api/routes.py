"""
API routes for the quote API.
A single catch-all handler answers every method on every path with a random quote.
"""

from datetime import datetime

from fastapi import Request
from starlette.types import Receive, Scope, Send

from quotes import QuoteSelector
from utils import api_metrics

from .models import HealthResponse, QuoteJSONResponse

CATCH_ALL_PATH = "/{full_path:path}"


def get_selector(request: Request) -> QuoteSelector:
    """从应用状态中获取选择器"""
    return request.app.state.selector


class QuoteEndpoint:
    """返回一条随机语录，忽略请求方法、路径、请求头和请求体

    以 ASGI 可调用对象注册，路由不做方法检查，
    TRACE、PROPFIND 等任意方法都会得到语录。
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        quote = get_selector(request).choose()
        api_metrics.increment("quotes_served")
        response = QuoteJSONResponse({"quote": quote})
        await response(scope, receive, send)


handle = QuoteEndpoint()


def add_quote_route(app) -> None:
    """注册 catch-all 语录路由，必须在其他路由之后调用"""
    app.add_route(CATCH_ALL_PATH, handle, name="quote")


def add_health_route(app, path: str, version: str) -> None:
    """注册健康检查端点，需在 catch-all 路由之前调用"""

    @app.get(path, response_model=HealthResponse, tags=["System"])
    async def health_check(request: Request):
        """健康检查端点"""
        return HealthResponse(
            status="healthy",
            timestamp=datetime.now().isoformat(),
            version=version,
            quotes=len(get_selector(request).catalog),
        )
