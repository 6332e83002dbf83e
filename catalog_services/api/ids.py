"""Parsing of entity id path segments."""

from __future__ import annotations

import re

from catalog_services.api.error_handlers import ValidationError

_ENTITY_ID_RE = re.compile(r"^-?[0-9]+$")


def parse_entity_id(raw_id: str) -> int:
    """Parse an id path segment; anything but a plain base-10 integer is rejected."""

    candidate = raw_id.strip()
    if not _ENTITY_ID_RE.match(candidate):
        raise ValidationError("invalid id")
    return int(candidate)
