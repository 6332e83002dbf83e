"""
Unit tests for service configuration loading.
It asserts per-service defaults, env overrides, and validation of unsafe values.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from catalog_services.api import api_config as config_module


def test_users_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "SERVICE_NAME", "DB_SCHEMA", "USERS_API_URL"):
        monkeypatch.delenv(name, raising=False)

    config = config_module.load_service_config(config_module.USERS_SERVICE_DEFAULTS, load_env=False)

    assert config.port == 4001
    assert config.service_name == "users-api"
    assert config.db_schema == "users_schema"
    assert config.users_api_url is None
    assert config.allowed_origins == ["*"]


def test_products_defaults_include_users_url(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "SERVICE_NAME", "DB_SCHEMA", "USERS_API_URL"):
        monkeypatch.delenv(name, raising=False)

    config = config_module.load_service_config(
        config_module.PRODUCTS_SERVICE_DEFAULTS, load_env=False
    )

    assert config.port == 4002
    assert config.service_name == "products-api"
    assert config.db_schema == "products_schema"
    assert config.users_api_url == "http://users-api:4001"
    assert config.users_api_timeout_seconds == 5.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("SERVICE_NAME", "products-api-canary")
    monkeypatch.setenv("USERS_API_URL", "http://localhost:4001/")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("AUTO_CREATE_SCHEMA", "yes")

    config = config_module.load_service_config(
        config_module.PRODUCTS_SERVICE_DEFAULTS, load_env=False
    )

    assert config.port == 9000
    assert config.service_name == "products-api-canary"
    assert config.users_api_url == "http://localhost:4001"
    assert config.allowed_origins == ["http://a.test", "http://b.test"]
    assert config.auto_create_schema is True


def test_service_specific_database_url_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("USERS_DATABASE_URL", "postgres://u:p@db:5432/users")

    config = config_module.load_service_config(config_module.USERS_SERVICE_DEFAULTS, load_env=False)

    assert config.database_url == "postgres://u:p@db:5432/users"


def test_missing_database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("USERS_DATABASE_URL", raising=False)

    with pytest.raises(RuntimeError, match="DATABASE_URL"):
        config_module.load_service_config(config_module.USERS_SERVICE_DEFAULTS, load_env=False)


def test_unsafe_schema_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_SCHEMA", "users; DROP TABLE users")

    with pytest.raises(ValidationError):
        config_module.load_service_config(config_module.USERS_SERVICE_DEFAULTS, load_env=False)


def test_bad_boolean_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AUTO_CREATE_SCHEMA", "sometimes")

    with pytest.raises(ValueError, match="boolean-like"):
        config_module.load_service_config(config_module.USERS_SERVICE_DEFAULTS, load_env=False)


def test_cached_accessor_returns_same_instance() -> None:
    first = config_module.get_users_service_config()
    assert config_module.get_users_service_config() is first


def test_schema_env_can_be_ignored_for_multi_service_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DB_SCHEMA", "shared_schema")

    users = config_module.load_service_config(
        config_module.USERS_SERVICE_DEFAULTS, load_env=False, schema_from_env=False
    )
    products = config_module.load_service_config(
        config_module.PRODUCTS_SERVICE_DEFAULTS, load_env=False, schema_from_env=False
    )
    single = config_module.load_service_config(
        config_module.USERS_SERVICE_DEFAULTS, load_env=False
    )

    assert users.db_schema == "users_schema"
    assert products.db_schema == "products_schema"
    assert single.db_schema == "shared_schema"
