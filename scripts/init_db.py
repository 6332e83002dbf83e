#!/usr/bin/env python3
"""
Create the schema and table backing one or both services.
Run it once against a fresh database before starting the services; reruns are no-ops.
It prints a JSON summary and exits non-zero when the store cannot be reached.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from catalog_services.api.api_config import (
    PRODUCTS_SERVICE_DEFAULTS,
    USERS_SERVICE_DEFAULTS,
    load_service_config,
)
from catalog_services.common.db_access import DatabaseClient, DatabaseError
from catalog_services.common.ddl import bootstrap_schema
from catalog_services.common.logging import configure_logging

SERVICE_TABLES = {
    "users": (USERS_SERVICE_DEFAULTS, "users"),
    "products": (PRODUCTS_SERVICE_DEFAULTS, "products"),
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create catalog service tables")
    parser.add_argument("--service", choices=["users", "products", "all"], default="all")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    names = list(SERVICE_TABLES) if args.service == "all" else [args.service]

    results: dict[str, str] = {}
    for name in names:
        defaults, table_name = SERVICE_TABLES[name]
        # DB_SCHEMA names one schema, so it only applies when a single service is initialized.
        config = load_service_config(defaults, schema_from_env=args.service != "all")
        configure_logging(config.log_level)
        db = DatabaseClient(database_url=config.database_url, sslmode=config.database_sslmode)
        try:
            bootstrap_schema(db, table_name=table_name, schema=config.db_schema)
            results[name] = "ok"
        except DatabaseError as exc:
            results[name] = f"failed: {exc}"
        finally:
            db.dispose()

    print(json.dumps(results, indent=2))
    if any(value != "ok" for value in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
