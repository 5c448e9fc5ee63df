"""
Middleware for the quote server API.
Provides request logging and error handling middleware components.
"""

import time
from typing import Callable
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from utils import api_logger, QuoteServerError, create_error_response


class LoggingMiddleware(BaseHTTPMiddleware):
    """日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)

            process_time = time.time() - start_time
            api_logger.info(
                f"[API] {client_ip} {request.method} {request.url.path} - "
                f"{response.status_code} - {process_time:.3f}s"
            )
            return response

        except Exception as e:
            process_time = time.time() - start_time
            api_logger.error(f"[API] {request.method} {request.url.path} - ERROR - {process_time:.3f}s - {str(e)}")
            raise


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """错误处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except QuoteServerError as e:
            api_logger.error(f"[API] Request failed: {e}")
            content = create_error_response(e)
            content.update({"timestamp": time.time()})
            return JSONResponse(status_code=500, content=content)

        except Exception as e:
            api_logger.error(f"[API] Unexpected error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "error": True,
                    "error_code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "timestamp": time.time()
                }
            )


def setup_middleware(app):
    """设置所有中间件"""
    # 添加中间件（后添加的在外层）
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(LoggingMiddleware)

    api_logger.info("[API] Middleware setup completed")
