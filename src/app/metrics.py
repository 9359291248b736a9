from __future__ import annotations

import time

from fastapi import Request
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.responses import Response
from starlette.routing import Match

from src.app.settings import settings

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
)
VALIDATION_COUNT = Counter(
    "list_query_validations_total",
    "List query parameter validations",
    ["parameter", "outcome", "reason"],
)


def record_validation(parameter: str, reason: str | None) -> None:
    if not settings.metrics_enabled:
        return
    outcome = "accepted" if reason is None else "rejected"
    VALIDATION_COUNT.labels(parameter, outcome, reason or "").inc()


def route_path(request: Request) -> str:
    """Route template matched by ``request``, or ``"unmatched"``."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match is Match.FULL:
            return route.path
    return "unmatched"


async def metrics_middleware(request: Request, call_next):
    if not settings.metrics_enabled:
        return await call_next(request)
    if request.url.path == "/metrics":
        return await call_next(request)
    path = route_path(request)
    start = time.monotonic()
    status = 500
    try:
        response = await call_next(request)
        status = response.status_code
        return response
    finally:
        duration = time.monotonic() - start
        REQUEST_COUNT.labels(request.method, path, str(status)).inc()
        REQUEST_LATENCY.labels(request.method, path).observe(duration)


def metrics_response() -> Response:
    if not settings.metrics_enabled:
        return Response(status_code=404)
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
