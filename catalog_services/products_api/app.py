# This file builds the products service application and its process entrypoint.
# The lifespan owns two process-scoped clients: the store client and the users-service HTTP client.
# Either can be injected by the caller, in which case the caller also owns closing it.

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from catalog_services.api.api_config import ServiceConfig, get_products_service_config
from catalog_services.api.app_factory import build_service_app, close_store, open_store
from catalog_services.common.db_access import DatabaseClient
from catalog_services.common.logging import configure_logging
from catalog_services.products_api.routers.products import router as products_router
from catalog_services.products_api.services.products_service import ProductsService
from catalog_services.products_api.services.users_client import UsersApiClient

LOGGER = logging.getLogger("catalog.products")


def create_app(
    *,
    config: ServiceConfig | None = None,
    db_client: DatabaseClient | None = None,
    users_client: UsersApiClient | None = None,
) -> FastAPI:
    """Create the products service; unspecified dependencies are built from env-driven config."""

    resolved_config = config or get_products_service_config()
    configure_logging(resolved_config.log_level)
    if resolved_config.users_api_url is None and users_client is None:
        raise RuntimeError("USERS_API_URL is required for the products service.")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned_store = await open_store(
            app,
            config=resolved_config,
            table_name=ProductsService.table_name,
            db_client=db_client,
        )
        owned_client = users_client is None
        app.state.users_client = users_client or UsersApiClient(
            base_url=str(resolved_config.users_api_url),
            timeout_seconds=resolved_config.users_api_timeout_seconds,
        )
        LOGGER.info("users service at %s", app.state.users_client.base_url)
        try:
            yield
        finally:
            if owned_client:
                app.state.users_client.close()
            await close_store(app, owned=owned_store)

    app = build_service_app(
        config=resolved_config,
        title="Products API",
        description="CRUD for products (id, name, price) plus a users-count composition.",
        routers=[products_router],
        lifespan=lifespan,
        tags=[
            {
                "name": "products",
                "description": "Create, list, read, update, and delete products; products with users count.",
            }
        ],
    )
    app.state.users_client = None
    return app


def main() -> None:
    config = get_products_service_config()
    uvicorn.run(
        "catalog_services.products_api.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
