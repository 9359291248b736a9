from __future__ import annotations

"""FastAPI application entrypoint for the list query validation service."""

import logging
import uuid

from fastapi import Depends, FastAPI, HTTPException, Query, Request

from src.app.dependencies import get_resource_registry
from src.app.metrics import metrics_middleware, metrics_response
from src.app.params import ListQueryError, parse_list_query_params
from src.app.resources import ResourceRegistry
from src.app.schemas import (
    ListQueryResponse,
    QueryErrorResponse,
    ResourceResponse,
    ResourcesResponse,
)
from src.app.settings import settings

logger = logging.getLogger(__name__)

app = FastAPI(title="List Query Validator", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.get("/resources", response_model=ResourcesResponse)
async def list_resources(
    registry: ResourceRegistry = Depends(get_resource_registry),
) -> ResourcesResponse:
    """Return the column allow-lists of every resource."""
    return ResourcesResponse(
        resources=[ResourceResponse.from_columns(resource) for resource in registry.all()]
    )


@app.get(
    "/resources/{resource}/query",
    response_model=ListQueryResponse,
    responses={400: {"model": QueryErrorResponse}},
)
async def validate_list_query(
    resource: str,
    http_request: Request,
    fields: str = Query(default=""),
    sort: str = Query(default=""),
    filter: str = Query(default=""),
    limit: str | None = Query(default=None),
    registry: ResourceRegistry = Depends(get_resource_registry),
) -> ListQueryResponse:
    """Validate the list parameters of a resource and return their parsed form."""
    request_id = getattr(http_request.state, "request_id", str(uuid.uuid4()))
    columns = registry.get(resource)
    if columns is None:
        raise HTTPException(status_code=404, detail="Unknown resource")
    try:
        params = parse_list_query_params(
            columns,
            fields=fields,
            sort=sort,
            filter=filter,
            limit=limit,
        )
    except ListQueryError as exc:
        logger.info(
            "list_query_invalid",
            extra={
                "request_id": request_id,
                "resource": columns.name,
                "parameter": exc.parameter,
                "reason": exc.reason,
            },
        )
        raise HTTPException(status_code=400, detail=exc.as_detail()) from exc
    logger.info(
        "list_query_accepted",
        extra={
            "request_id": request_id,
            "resource": columns.name,
            "fields": len(params.fields.columns),
            "sort_keys": len(params.sort.keys),
            "conditions": len(params.filter.conditions),
            "limit": params.limit,
        },
    )
    return ListQueryResponse.from_params(columns.name, params, request_id)
