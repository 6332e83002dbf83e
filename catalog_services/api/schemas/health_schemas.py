# This file defines response schemas for the liveness and store-connectivity endpoints.
# Stable health schemas make container and orchestrator checks straightforward to automate.

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    service: str


class DbHealthResponse(BaseModel):
    ok: bool
    error: str | None = None
