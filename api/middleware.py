"""
Middleware for the quote API.
Provides request logging, error handling and security headers.
"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from utils import api_logger, api_metrics, ErrorCodes
from .models import ErrorResponse, QuoteJSONResponse


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        api_logger.debug(f"[API] {request.method} {request.url} from {client_ip}")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url} - ERROR - {process_time:.3f}s - {str(e)}")
            raise

        process_time = time.time() - start_time
        api_logger.info(f"[API] {request.method} {request.url} - {response.status_code} - {process_time:.3f}s")
        api_metrics.timing("request", process_time)

        # 添加处理时间和请求ID到响应头
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        response.headers["X-Request-ID"] = uuid.uuid4().hex

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件，未预期的异常统一转换为 500 JSON 响应"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            api_metrics.increment("errors")
            return QuoteJSONResponse(
                status_code=500,
                content=ErrorResponse(
                    error="Internal Server Error",
                    error_code=ErrorCodes.API_INTERNAL_ERROR,
                    timestamp=time.time(),
                    details={"message": "An unexpected error occurred"}
                ).model_dump()
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """安全头中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"

        return response


def setup_middleware(app):
    """设置所有中间件"""
    # 后添加的中间件位于外层
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)

    api_logger.info("[API] Middleware setup completed")
