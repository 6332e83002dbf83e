# This file builds the users service application and its process entrypoint.
# The store client is created in the lifespan (or injected by the caller) and disposed at shutdown.

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from catalog_services.api.api_config import ServiceConfig, get_users_service_config
from catalog_services.api.app_factory import build_service_app, close_store, open_store
from catalog_services.common.db_access import DatabaseClient
from catalog_services.common.logging import configure_logging
from catalog_services.users_api.routers.users import router as users_router
from catalog_services.users_api.services.users_service import UsersService


def create_app(
    *,
    config: ServiceConfig | None = None,
    db_client: DatabaseClient | None = None,
) -> FastAPI:
    """Create the users service; `config` and `db_client` default to env-driven instances."""

    resolved_config = config or get_users_service_config()
    configure_logging(resolved_config.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = await open_store(
            app,
            config=resolved_config,
            table_name=UsersService.table_name,
            db_client=db_client,
        )
        try:
            yield
        finally:
            await close_store(app, owned=owned)

    return build_service_app(
        config=resolved_config,
        title="Users API",
        description="CRUD for users (id, name, email).",
        routers=[users_router],
        lifespan=lifespan,
        tags=[{"name": "users", "description": "Create, list, read, update, and delete users."}],
    )


def main() -> None:
    config = get_users_service_config()
    uvicorn.run(
        "catalog_services.users_api.app:create_app",
        factory=True,
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
