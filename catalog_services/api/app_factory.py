# This file builds the FastAPI application shell shared by both services.
# It exists so middleware, CORS, metrics, error handling, and health routes are configured in one place.
# The middleware adds request IDs, timing headers, and request logging for operations visibility.
# Store lifecycle helpers open the process-wide DatabaseClient at startup and dispose it at shutdown.

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import RequestResponseEndpoint
from starlette.routing import Match

from catalog_services.api.api_config import ServiceConfig
from catalog_services.api.error_handlers import register_error_handlers
from catalog_services.api.routers.health import router as health_router
from catalog_services.common.db_access import DatabaseClient, DatabaseError
from catalog_services.common.ddl import bootstrap_schema

LOGGER = logging.getLogger("catalog.http")

HTTP_REQUESTS_TOTAL = Counter(
    "catalog_http_requests_total",
    "Total number of HTTP requests processed.",
    ["service", "method", "path", "status_code"],
)
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "catalog_http_request_duration_seconds",
    "HTTP request duration in seconds.",
    ["service", "method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
HTTP_INFLIGHT_REQUESTS = Gauge(
    "catalog_http_inflight_requests",
    "Number of HTTP requests currently being processed.",
    ["service", "method", "path"],
)

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


UNMATCHED_ROUTE_LABEL = "<unmatched>"


def _route_label(request: Request) -> str:
    """Return the template of the route serving this request, or one fixed label when none matches."""

    partial_path: str | None = None
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_ROUTE_LABEL)
        if match == Match.PARTIAL and partial_path is None:
            partial_path = getattr(route, "path", None)
    return partial_path or UNMATCHED_ROUTE_LABEL


def build_service_app(
    *,
    config: ServiceConfig,
    title: str,
    description: str,
    routers: Sequence[APIRouter],
    lifespan: Lifespan,
    tags: list[dict[str, str]] | None = None,
) -> FastAPI:
    """Create the FastAPI shell shared by both services and mount the entity routers."""

    app = FastAPI(
        title=title,
        description=description,
        version=config.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service liveness and store connectivity."},
            *(tags or []),
        ],
    )
    app.state.config = config
    app.state.db_client = None

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials="*" not in config.allowed_origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    service_label = config.service_name

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = _route_label(request)
        started = time.perf_counter()
        status_code = 500
        HTTP_INFLIGHT_REQUESTS.labels(
            service=service_label, method=method_label, path=path_label
        ).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            LOGGER.info(
                "%s %s status=%s duration_ms=%.2f request_id=%s",
                method_label,
                request.url.path,
                status_code,
                duration_ms,
                request_id,
            )
            return response
        finally:
            duration_s = time.perf_counter() - started
            HTTP_REQUESTS_TOTAL.labels(
                service=service_label,
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            HTTP_REQUEST_DURATION_SECONDS.labels(
                service=service_label,
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            HTTP_INFLIGHT_REQUESTS.labels(
                service=service_label, method=method_label, path=path_label
            ).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    for router in routers:
        app.include_router(router)

    return app


async def open_store(
    app: FastAPI,
    *,
    config: ServiceConfig,
    table_name: str,
    db_client: DatabaseClient | None,
) -> bool:
    """Attach the store client to `app.state`; returns True when the app built (and owns) it.

    Schema bootstrap and the connectivity check run in the threadpool.
    """

    owned = db_client is None
    client = db_client or DatabaseClient(
        database_url=config.database_url,
        sslmode=config.database_sslmode,
    )
    app.state.db_client = client

    app.state.db_connected_at_startup = await run_in_threadpool(
        _prepare_store, client, config=config, table_name=table_name
    )
    LOGGER.info(
        "%s starting on port %s db_reachable=%s",
        config.service_name,
        config.port,
        app.state.db_connected_at_startup,
    )
    return owned


async def close_store(app: FastAPI, *, owned: bool) -> None:
    client: DatabaseClient | None = app.state.db_client
    if owned and client is not None:
        await run_in_threadpool(client.dispose)
    LOGGER.info("%s stopped", app.state.config.service_name)


def _prepare_store(client: DatabaseClient, *, config: ServiceConfig, table_name: str) -> bool:
    if config.auto_create_schema:
        try:
            bootstrap_schema(client, table_name=table_name, schema=config.db_schema)
        except DatabaseError as exc:
            LOGGER.warning("schema bootstrap skipped for %s: %s", table_name, exc)
    return client.can_connect()
