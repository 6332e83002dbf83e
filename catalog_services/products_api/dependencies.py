# This file provides dependency factories for the products routes.
# The users client lives on `app.state` next to the store client so both share the process lifecycle.

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from catalog_services.api.api_config import ServiceConfig
from catalog_services.api.dependencies import get_config, get_database_client
from catalog_services.common.db_access import DatabaseClient
from catalog_services.products_api.services.products_service import ProductsService
from catalog_services.products_api.services.users_client import UsersApiClient


def get_products_service(
    db: Annotated[DatabaseClient, Depends(get_database_client)],
    config: Annotated[ServiceConfig, Depends(get_config)],
) -> ProductsService:
    return ProductsService(db=db, schema=config.db_schema)


def get_users_client(request: Request) -> UsersApiClient:
    return request.app.state.users_client
