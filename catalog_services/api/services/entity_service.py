# This file implements the per-entity data access shared by the users and products services.
# Each operation is exactly one parameterized statement against the schema-qualified table.
# Absent rows are returned as None; store failures become StoreError named after the operation.
# Subclasses only declare the table, the domain columns, and which columns are numeric.

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from catalog_services.api.error_handlers import StoreError
from catalog_services.common.db_access import DatabaseClient, DatabaseError, validate_identifier

LOGGER = logging.getLogger("catalog.store")


def to_number(value: Any) -> float:
    """Convert a stored numeric (Decimal, text, or NULL) into a JSON-friendly float."""

    if value is None:
        return 0.0
    return float(value)


class EntityService:
    """CRUD statements for one entity table."""

    table_name: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]
    numeric_columns: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, *, db: DatabaseClient, schema: str = "") -> None:
        self.db = db
        table = validate_identifier(self.table_name)
        self.table = f"{validate_identifier(schema)}.{table}" if schema else table
        for column in self.columns:
            validate_identifier(column)
        self._select_list = ", ".join(("id", *self.columns))

    def create(self, values: Mapping[str, Any]) -> dict[str, Any]:
        column_sql = ", ".join(self.columns)
        value_sql = ", ".join(f":{column}" for column in self.columns)
        query = f"""
        INSERT INTO {self.table} ({column_sql})
        VALUES ({value_sql})
        RETURNING {self._select_list}
        """
        params = {column: values.get(column) for column in self.columns}
        row = self._run("insert", self.db.execute_returning, query, params)
        if row is None:
            raise StoreError("insert failed", detail="INSERT returned no row")
        return self._to_entity(row)

    def list(self) -> list[dict[str, Any]]:
        query = f"SELECT {self._select_list} FROM {self.table} ORDER BY id ASC"
        rows = self._run("query", self.db.fetch_all, query, None)
        return [self._to_entity(row) for row in rows]

    def get_by_id(self, entity_id: int) -> dict[str, Any] | None:
        query = f"SELECT {self._select_list} FROM {self.table} WHERE id = :id"
        row = self._run("query", self.db.fetch_one, query, {"id": entity_id})
        return self._to_entity(row) if row is not None else None

    def update(self, entity_id: int, values: Mapping[str, Any]) -> dict[str, Any] | None:
        """Overwrite only the supplied (non-null) columns; the rest keep their stored value."""

        set_sql = ", ".join(f"{column} = COALESCE(:{column}, {column})" for column in self.columns)
        query = f"""
        UPDATE {self.table}
        SET {set_sql}
        WHERE id = :id
        RETURNING {self._select_list}
        """
        params: dict[str, Any] = {column: values.get(column) for column in self.columns}
        params["id"] = entity_id
        row = self._run("update", self.db.execute_returning, query, params)
        return self._to_entity(row) if row is not None else None

    def delete(self, entity_id: int) -> dict[str, Any] | None:
        query = f"DELETE FROM {self.table} WHERE id = :id RETURNING {self._select_list}"
        row = self._run("delete", self.db.execute_returning, query, {"id": entity_id})
        return self._to_entity(row) if row is not None else None

    def _run(self, operation: str, method: Any, query: str, params: dict[str, Any] | None) -> Any:
        try:
            return method(query, params)
        except DatabaseError as exc:
            LOGGER.warning("%s on %s failed: %s", operation, self.table, exc)
            raise StoreError(f"{operation} failed", detail=str(exc)) from exc

    def _to_entity(self, row: Mapping[str, Any]) -> dict[str, Any]:
        entity: dict[str, Any] = {"id": int(row["id"])}
        for column in self.columns:
            value = row[column]
            entity[column] = to_number(value) if column in self.numeric_columns else value
        return entity
