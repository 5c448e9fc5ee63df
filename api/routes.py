"""
API routes for the quote server.
Health check and home page endpoints.
"""

from fastapi import APIRouter, Request, Response

from utils import api_logger

STATUS_ENDPOINT = "/status"
HOME_PAGE_ENDPOINT = "/"

STATUS_MESSAGE = b"Server is alive\n"

# 所有方法都注册到路由上，由处理函数自行决定如何响应非 GET 请求
ROUTED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

router = APIRouter()


def _is_get(request: Request) -> bool:
    return request.method.upper() == "GET"


def close_connection() -> Response:
    """不写响应体，通知服务端在响应后关闭连接"""
    return Response(status_code=204, headers={"Connection": "close"})


@router.api_route(STATUS_ENDPOINT, methods=ROUTED_METHODS, include_in_schema=False)
def status_check(request: Request) -> Response:
    """健康检查"""
    if not _is_get(request):
        return close_connection()

    api_logger.info("[API] Received a health check")
    return Response(content=STATUS_MESSAGE)


@router.api_route(HOME_PAGE_ENDPOINT, methods=ROUTED_METHODS, include_in_schema=False)
def home_page(request: Request) -> Response:
    """首页：随机名言和主机名"""
    if not _is_get(request):
        return close_connection()

    api_logger.info("[API] Server received a request for a quote")
    quote = request.app.state.quote_store.random_quote()
    body = request.app.state.page_renderer.render(quote)

    return Response(
        content=body,
        headers={
            "Content-Type": "text/html",
            "Cache-Control": "no-cache"
        }
    )
