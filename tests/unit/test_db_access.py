"""
Unit tests for the DatabaseClient wrapper and DDL helpers.
"""

from __future__ import annotations

import pytest

from catalog_services.common.db_access import (
    DatabaseClient,
    DatabaseError,
    normalize_database_url,
    validate_identifier,
)
from catalog_services.common.ddl import build_table_ddl


def test_normalize_database_url() -> None:
    assert (
        normalize_database_url("postgres://u:p@db:5432/app")
        == "postgresql+psycopg2://u:p@db:5432/app"
    )
    assert normalize_database_url("postgresql://u:p@db/app") == "postgresql://u:p@db/app"


def test_validate_identifier() -> None:
    assert validate_identifier("products_schema") == "products_schema"
    with pytest.raises(ValueError):
        validate_identifier("products-schema")


def test_client_requires_url_or_engine() -> None:
    with pytest.raises(ValueError):
        DatabaseClient()


def test_fetch_helpers(sqlite_db: DatabaseClient) -> None:
    assert sqlite_db.can_connect() is True
    assert sqlite_db.fetch_scalar("SELECT 1 AS ok") == 1
    assert sqlite_db.fetch_one("SELECT id FROM users WHERE id = :id", {"id": 1}) is None
    assert sqlite_db.fetch_all("SELECT id FROM users") == []


def test_execute_returning_commits(sqlite_db: DatabaseClient) -> None:
    row = sqlite_db.execute_returning(
        "INSERT INTO users (name, email) VALUES (:name, :email) RETURNING id, name",
        {"name": "Ada", "email": "ada@example.com"},
    )

    assert row == {"id": 1, "name": "Ada"}
    assert sqlite_db.fetch_scalar("SELECT COUNT(*) FROM users") == 1


def test_driver_errors_become_database_error(sqlite_db: DatabaseClient) -> None:
    with pytest.raises(DatabaseError, match="no such table"):
        sqlite_db.fetch_all("SELECT * FROM missing_table")


def test_build_table_ddl_with_schema() -> None:
    statements = build_table_ddl(table_name="products", schema="products_schema")

    assert statements[0] == "CREATE SCHEMA IF NOT EXISTS products_schema"
    assert statements[1].startswith("CREATE TABLE IF NOT EXISTS products_schema.products (")
    assert "NUMERIC(12, 2)" in statements[1]


def test_build_table_ddl_without_schema() -> None:
    statements = build_table_ddl(table_name="users", schema="")

    assert statements == [
        "CREATE TABLE IF NOT EXISTS users (id SERIAL PRIMARY KEY, name TEXT NOT NULL, email TEXT NOT NULL)"
    ]


def test_build_table_ddl_unknown_table() -> None:
    with pytest.raises(ValueError, match="No DDL registered"):
        build_table_ddl(table_name="orders", schema="")
