# This file defines the liveness and store-connectivity endpoints mounted by both services.
# Liveness never touches the store; the DB check runs one trivial query and reports the driver error on failure.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog_services.api.api_config import ServiceConfig
from catalog_services.api.dependencies import get_config, get_database_client
from catalog_services.api.schemas.health_schemas import DbHealthResponse, HealthResponse
from catalog_services.common.db_access import DatabaseClient, DatabaseError

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ServiceConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


@router.get("/health", response_model=HealthResponse)
def health(config: ConfigDep) -> dict[str, object]:
    return {"status": "ok", "service": config.service_name}


@router.get(
    "/db/health",
    response_model=DbHealthResponse,
    response_model_exclude_none=True,
    responses={500: {"model": DbHealthResponse}},
)
def db_health(db: DBDep) -> object:
    try:
        value = db.fetch_scalar("SELECT 1 AS ok")
    except DatabaseError as exc:
        return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})
    return {"ok": value == 1}
