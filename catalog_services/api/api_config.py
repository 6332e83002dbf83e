# This file defines runtime settings for both services in one place.
# It exists so ports, service labels, store location, and the downstream users URL can be configured without code edits.
# The config loader reads `.env` and the process environment and applies per-service defaults.
# It also validates the schema name to prevent unsafe SQL identifier usage.

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ServiceConfig(BaseModel):
    """Typed runtime configuration for one service process."""

    model_config = ConfigDict(extra="ignore")

    service_name: str
    host: str = "0.0.0.0"
    port: int
    database_url: str
    database_sslmode: str | None = None
    db_schema: str = ""
    auto_create_schema: bool = False
    users_api_url: str | None = None
    users_api_timeout_seconds: float = 5.0
    allowed_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    app_version: str = "0.1.0"

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value

    @field_validator("db_schema")
    @classmethod
    def validate_schema(cls, value: str) -> str:
        if value and not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("users_api_url")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        return value.rstrip("/") if value else value

    @field_validator("users_api_timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value


@dataclass(frozen=True)
class ServiceDefaults:
    service_name: str
    port: int
    db_schema: str
    database_url_env: str
    users_api_url: str | None = None


USERS_SERVICE_DEFAULTS = ServiceDefaults(
    service_name="users-api",
    port=4001,
    db_schema="users_schema",
    database_url_env="USERS_DATABASE_URL",
)

PRODUCTS_SERVICE_DEFAULTS = ServiceDefaults(
    service_name="products-api",
    port=4002,
    db_schema="products_schema",
    database_url_env="PRODUCTS_DATABASE_URL",
    users_api_url="http://users-api:4001",
)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_service_config(
    defaults: ServiceDefaults,
    *,
    load_env: bool = True,
    schema_from_env: bool = True,
) -> ServiceConfig:
    """Load service configuration from `.env` and process environment.

    With `schema_from_env=False` the service's default schema is used even when `DB_SCHEMA` is set.
    """

    if load_env:
        load_dotenv()

    database_url = os.getenv("DATABASE_URL") or os.getenv(defaults.database_url_env, "")
    if not database_url:
        raise RuntimeError(
            f"DATABASE_URL (or {defaults.database_url_env}) is required for "
            f"{defaults.service_name} startup."
        )

    config_values: dict[str, object] = {
        "service_name": os.getenv("SERVICE_NAME", defaults.service_name),
        "host": os.getenv("HOST", "0.0.0.0"),
        "port": _env_int("PORT", defaults.port),
        "database_url": database_url,
        "database_sslmode": os.getenv("DATABASE_SSLMODE") or None,
        "db_schema": (
            os.getenv("DB_SCHEMA", defaults.db_schema) if schema_from_env else defaults.db_schema
        ),
        "auto_create_schema": _env_bool("AUTO_CREATE_SCHEMA", False),
        "users_api_timeout_seconds": _env_float("USERS_API_TIMEOUT_SECONDS", 5.0),
        "allowed_origins": _env_list("ALLOWED_ORIGINS", ["*"]),
        "log_level": os.getenv("LOG_LEVEL", "INFO"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if defaults.users_api_url is not None:
        config_values["users_api_url"] = os.getenv("USERS_API_URL", defaults.users_api_url)

    return ServiceConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_users_service_config() -> ServiceConfig:
    return load_service_config(USERS_SERVICE_DEFAULTS)


@lru_cache(maxsize=1)
def get_products_service_config() -> ServiceConfig:
    return load_service_config(PRODUCTS_SERVICE_DEFAULTS)
