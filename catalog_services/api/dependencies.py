# This file provides dependency factories for FastAPI routes shared by both services.
# Process-scoped objects are built once in the app lifespan and kept on `app.state`.
# Routes receive them through `Depends`, which keeps routers thin and lets tests inject fakes.

from __future__ import annotations

from fastapi import Request

from catalog_services.api.api_config import ServiceConfig
from catalog_services.common.db_access import DatabaseClient


def get_config(request: Request) -> ServiceConfig:
    return request.app.state.config


def get_database_client(request: Request) -> DatabaseClient:
    return request.app.state.db_client
