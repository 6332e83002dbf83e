"""DDL helpers for the users and products tables."""

from __future__ import annotations

import logging

from catalog_services.common.db_access import DatabaseClient, validate_identifier

LOGGER = logging.getLogger("catalog.ddl")

TABLE_COLUMNS_DDL: dict[str, str] = {
    "users": "id SERIAL PRIMARY KEY, name TEXT NOT NULL, email TEXT NOT NULL",
    "products": "id SERIAL PRIMARY KEY, name TEXT NOT NULL, price NUMERIC(12, 2) NOT NULL",
}


def build_table_ddl(*, table_name: str, schema: str) -> list[str]:
    """Return the ordered statements creating `schema.table_name` when missing."""

    columns = TABLE_COLUMNS_DDL.get(table_name)
    if columns is None:
        raise ValueError(f"No DDL registered for table {table_name!r}")

    statements: list[str] = []
    qualified = validate_identifier(table_name)
    if schema:
        validate_identifier(schema)
        statements.append(f"CREATE SCHEMA IF NOT EXISTS {schema}")
        qualified = f"{schema}.{table_name}"
    statements.append(f"CREATE TABLE IF NOT EXISTS {qualified} ({columns})")
    return statements


def bootstrap_schema(db: DatabaseClient, *, table_name: str, schema: str) -> None:
    """Apply the table DDL in order; safe to rerun."""

    for statement in build_table_ddl(table_name=table_name, schema=schema):
        db.execute(statement)
    LOGGER.info("schema ready table=%s schema=%s", table_name, schema or "<default>")
