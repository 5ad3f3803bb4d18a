"""
请求日志中间件

为每个请求绑定 request_id，记录起止日志并累计请求指标。
健康检查与指标抓取只记 debug 日志。
"""
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from api.metrics import increment_request

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
QUIET_PATHS = frozenset({"/health", "/api/v1/health", "/metrics"})


def _endpoint_label(request: Request) -> str:
    """指标标签使用路由模板，未匹配路由时使用原始路径"""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    请求日志中间件

    响应头附带 X-Request-ID 与 X-Response-Time。
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or f"req_{uuid.uuid4().hex[:12]}"

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        path = request.url.path
        log = logger.debug if path in QUIET_PATHS else logger.info
        start_time = time.perf_counter()

        log(
            "request_started",
            method=request.method,
            path=path,
            query=str(request.query_params) if request.query_params else None,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "request_failed",
                method=request.method,
                path=path,
                error=str(e),
                duration_ms=round(duration_ms, 2),
                exc_info=True,
            )
            increment_request(500, _endpoint_label(request), duration_ms / 1000)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log(
            "request_completed",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        increment_request(response.status_code, _endpoint_label(request), duration_ms / 1000)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        return response
