# This file wraps database access so services can run parameterized SQL safely.
# It exists to keep SQL execution details and pool ownership out of router code.
# Driver failures are converted into one DatabaseError type carrying the driver message.
# One client is built per process at startup and disposed at shutdown.

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DatabaseError(RuntimeError):
    """Raised when a statement cannot be executed against the store."""


def validate_identifier(identifier: str) -> str:
    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


def normalize_database_url(database_url: str) -> str:
    """Map libpq-style `postgres://` URLs onto the SQLAlchemy psycopg2 dialect."""

    if database_url.startswith("postgres://"):
        return "postgresql+psycopg2://" + database_url[len("postgres://") :]
    return database_url


class DatabaseClient:
    """Minimal SQLAlchemy wrapper owning the connection pool for one service."""

    def __init__(
        self,
        *,
        database_url: str | None = None,
        sslmode: str | None = None,
        engine: Engine | None = None,
    ) -> None:
        if engine is None:
            if not database_url:
                raise ValueError("database_url is required when no engine is supplied.")
            url = normalize_database_url(database_url)
            connect_args: dict[str, Any] = {}
            if sslmode and url.startswith("postgresql"):
                connect_args["sslmode"] = sslmode
            engine = create_engine(url, pool_pre_ping=True, future=True, connect_args=connect_args)
        self._engine: Engine = engine

    @property
    def engine(self) -> Engine:
        return self._engine

    def can_connect(self) -> bool:
        try:
            self.fetch_scalar("SELECT 1")
            return True
        except DatabaseError:
            return False

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._translate_errors(), self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._translate_errors(), self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def fetch_scalar(self, query: str, params: Mapping[str, Any] | None = None) -> Any:
        with self._translate_errors(), self._engine.connect() as connection:
            return connection.execute(text(query), dict(params or {})).scalar_one()

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> None:
        with self._translate_errors(), self._engine.begin() as connection:
            connection.execute(text(query), dict(params or {}))

    def execute_returning(
        self, query: str, params: Mapping[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Run a write statement with a RETURNING clause and commit it."""

        with self._translate_errors(), self._engine.begin() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
            return dict(row) if row is not None else None

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise DatabaseError(str(exc)) from exc
