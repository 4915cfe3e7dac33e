"""Request/response logging middleware with timing and HTTP metrics."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from creditwise.core.metrics import record_http_request

logger = structlog.get_logger(__name__)


def _endpoint_label(request: Request) -> str:
    """Route template (e.g. /v1/reports/{report_id}/document) to keep label cardinality low."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request and records it in the HTTP metrics.

    The request id comes from the structlog context bound by
    RequestContextMiddleware. /metrics scrapes are not counted.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(method=method, path=path)

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            if path != "/metrics":
                record_http_request(method, _endpoint_label(request), response.status_code, duration)

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            record_http_request(method, _endpoint_label(request), 500, duration)

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            raise
