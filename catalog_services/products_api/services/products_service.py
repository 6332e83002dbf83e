"""Data access for `products`; `price` is NUMERIC in the store and a float on the wire."""

from __future__ import annotations

from catalog_services.api.services.entity_service import EntityService


class ProductsService(EntityService):
    table_name = "products"
    columns = ("name", "price")
    numeric_columns = frozenset({"price"})
