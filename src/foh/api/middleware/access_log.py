from __future__ import annotations

import logging
import time

from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("foh.api.access")

HTTP_REQUESTS_TOTAL = Counter(
    "foh_http_requests_total",
    "HTTP requests handled, by route template and status.",
    ["method", "route", "status_code"],
)
HTTP_REQUEST_SECONDS = Histogram(
    "foh_http_request_duration_seconds",
    "HTTP request latency in seconds, by route template.",
    ["method", "route"],
)

# probes and scrapes are counted but only logged at debug
QUIET_PREFIXES = ("/health", "/metrics")


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _role(request: Request) -> str | None:
    session = getattr(request.state, "session", None)
    return session.role.value if session is not None else None


def _observe(request: Request, status_code: int, started: float) -> float:
    elapsed = time.perf_counter() - started
    route = _route_template(request)
    HTTP_REQUESTS_TOTAL.labels(
        method=request.method, route=route, status_code=str(status_code)
    ).inc()
    HTTP_REQUEST_SECONDS.labels(method=request.method, route=route).observe(elapsed)
    return round(elapsed * 1000, 2)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """One structured log line and one metric sample per request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request_failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": 500,
                    "duration_ms": _observe(request, 500, started),
                    "role": _role(request),
                },
            )
            raise

        fields = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": _observe(request, response.status_code, started),
            "role": _role(request),
        }
        level = logging.DEBUG if request.url.path.startswith(QUIET_PREFIXES) else logging.INFO
        logger.log(level, "request_complete", extra=fields)
        return response
