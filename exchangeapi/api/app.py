# This file builds the FastAPI application and registers all API routes.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# Resource classes are mounted through the route table, which reads their verb markers.
# The app adds request IDs, timing headers, and Prometheus request metrics.

from __future__ import annotations

import time
import uuid
from typing import Any

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from exchangeapi.api.api_config import ApiConfig, get_api_config
from exchangeapi.api.error_handlers import register_error_handlers
from exchangeapi.api.resources.admin_status import AdminStatusResource
from exchangeapi.api.routers.health import router as health_router
from exchangeapi.api.schemas.common import ErrorResponse
from exchangeapi.common.logging import configure_logging
from exchangeapi.routing import RouteTable

API_HTTP_REQUESTS_TOTAL = Counter(
    "exchange_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "exchange_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "exchange_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)

RESOURCE_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Request body changes nothing."},
    405: {"model": ErrorResponse, "description": "Verb not handled by this resource."},
    422: {"model": ErrorResponse, "description": "Request body failed validation."},
    500: {"model": ErrorResponse, "description": "Unexpected server error."},
}


def build_route_table(config: ApiConfig) -> RouteTable:
    """Mount every marker-routed resource at its configured path."""

    route_table = RouteTable()
    route_table.add_resource(
        config.admin_status_path(),
        AdminStatusResource(config=config, route_table=route_table),
    )
    return route_table


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = config or get_api_config()

    app = FastAPI(
        title=config.api_name,
        description="Exchange API with marker-routed resources, including PATCH handlers.",
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness and version metadata."},
            {"name": "admin", "description": "Administrative status of the exchange."},
        ],
    )
    app.state.config = config

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = request.url.path
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    route_table = build_route_table(config)
    app.state.route_table = route_table
    resource_router = APIRouter(tags=["admin"])
    route_table.install(resource_router, responses=RESOURCE_ERROR_RESPONSES)

    app.include_router(health_router)
    app.include_router(resource_router)

    return app


app = create_app()
