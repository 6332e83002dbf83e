# This file provides dependency factories for the users routes.

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from catalog_services.api.api_config import ServiceConfig
from catalog_services.api.dependencies import get_config, get_database_client
from catalog_services.common.db_access import DatabaseClient
from catalog_services.users_api.services.users_service import UsersService


def get_users_service(
    db: Annotated[DatabaseClient, Depends(get_database_client)],
    config: Annotated[ServiceConfig, Depends(get_config)],
) -> UsersService:
    return UsersService(db=db, schema=config.db_schema)
