# This file defines schema pieces reused by both services.
# The error model documents the shared failure payload in the OpenAPI output.

from __future__ import annotations

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None


ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse, "description": "Missing or malformed input."},
    404: {"model": ErrorResponse, "description": "No row matches the id."},
    500: {"model": ErrorResponse, "description": "Store failure."},
}
