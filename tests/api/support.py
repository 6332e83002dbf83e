# This file provides shared helpers for endpoint tests of both services.
# It exists so tests run against an in-memory SQLite store instead of a real PostgreSQL server.
# The helpers build deterministic configs, seeded store clients, and scoped TestClient contexts.
# Centralized test wiring keeps endpoint tests small and focused on behavior.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from catalog_services.api.api_config import ServiceConfig
from catalog_services.common.db_access import DatabaseClient, DatabaseError
from catalog_services.products_api.app import create_app as create_products_app
from catalog_services.products_api.services.users_client import UsersApiClient
from catalog_services.users_api.app import create_app as create_users_app

SQLITE_TABLES_DDL = (
    "CREATE TABLE users (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, email TEXT NOT NULL)",
    "CREATE TABLE products (id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT NOT NULL, price NUMERIC NOT NULL)",
)


def build_test_config(
    *,
    service_name: str = "users-api",
    port: int = 4001,
    users_api_url: str | None = None,
) -> ServiceConfig:
    """Create deterministic service config for tests; an empty schema targets bare SQLite tables."""

    return ServiceConfig(
        service_name=service_name,
        host="127.0.0.1",
        port=port,
        database_url="sqlite+pysqlite:///:memory:",
        db_schema="",
        auto_create_schema=False,
        users_api_url=users_api_url,
        users_api_timeout_seconds=2.0,
        allowed_origins=["*"],
        log_level="INFO",
        app_version="0.1.0",
    )


def build_sqlite_db_client(*, create_tables: bool = True) -> DatabaseClient:
    """In-memory SQLite store shared across threads through a single static connection."""

    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )
    client = DatabaseClient(engine=engine)
    if create_tables:
        for statement in SQLITE_TABLES_DDL:
            client.execute(statement)
    return client


class UnreachableDBClient:
    """Store double whose every statement fails like a refused connection."""

    def __init__(self, message: str = "connection refused") -> None:
        self.message = message

    def can_connect(self) -> bool:
        return False

    def _fail(self, *_: Any, **__: Any) -> Any:
        raise DatabaseError(self.message)

    fetch_all = _fail
    fetch_one = _fail
    fetch_scalar = _fail
    execute = _fail
    execute_returning = _fail

    def dispose(self) -> None:
        return None


class FakeResponse:
    def __init__(self, *, status_code: int = 200, payload: Any = None, invalid_json: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeSession:
    def __init__(
        self, responses: list[FakeResponse] | None = None, raise_error: Exception | None = None
    ) -> None:
        self.responses = responses or []
        self.raise_error = raise_error
        self.calls: list[tuple[str, float]] = []
        self.closed = False

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.raise_error is not None:
            raise self.raise_error
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


def build_users_client(session: FakeSession) -> UsersApiClient:
    return UsersApiClient(base_url="http://users-api:4001/", timeout_seconds=2.0, session=session)


@contextmanager
def users_test_client(
    *,
    db_client: Any | None = None,
    config: ServiceConfig | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient for the users service backed by the given (or a fresh) store."""

    app = create_users_app(
        config=config or build_test_config(),
        db_client=db_client or build_sqlite_db_client(),
    )
    with TestClient(app) as client:
        yield client


@contextmanager
def products_test_client(
    *,
    db_client: Any | None = None,
    users_client: UsersApiClient | None = None,
    config: ServiceConfig | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient for the products service with an injected users-service client."""

    resolved_config = config or build_test_config(
        service_name="products-api",
        port=4002,
        users_api_url="http://users-api:4001",
    )
    app = create_products_app(
        config=resolved_config,
        db_client=db_client or build_sqlite_db_client(),
        users_client=users_client or build_users_client(FakeSession([FakeResponse(payload=[])])),
    )
    with TestClient(app) as client:
        yield client
