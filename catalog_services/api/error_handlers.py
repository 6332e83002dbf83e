# This file defines the error taxonomy and the exception handlers shared by both services.
# It exists so every endpoint returns the same `{"error": ..., "detail": ...}` shape.
# Store and upstream failures keep the stringified underlying error in `detail` to aid debugging.
# Centralized handlers also cover request-body coercion failures and unexpected exceptions.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

LOGGER = logging.getLogger("catalog.errors")


class APIError(Exception):
    """Domain error type rendered as an HTTP error payload."""

    status_code = 500

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        if status_code is not None:
            self.status_code = status_code
        self.message = message
        self.detail = detail
        super().__init__(message)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class ValidationError(APIError):
    """Client input is missing required fields or is malformed."""

    status_code = 400


class NotFoundError(APIError):
    """No row matches the requested id."""

    status_code = 404


class StoreError(APIError):
    """A database statement failed (connectivity, constraint, malformed query)."""

    status_code = 500


class UpstreamError(APIError):
    """A call to a sibling service failed."""

    status_code = 502


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.status_code >= 500:
            LOGGER.warning(
                "%s %s failed status=%s error=%s detail=%s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
                exc.detail,
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        error = ValidationError("invalid request body", detail=_format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_payload())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "internal error", "detail": str(exc)},
        )
