"""Data access for `users`."""

from __future__ import annotations

from catalog_services.api.services.entity_service import EntityService


class UsersService(EntityService):
    table_name = "users"
    columns = ("name", "email")
