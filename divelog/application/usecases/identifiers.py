"""Path identifiers arrive as strings; anything that is not a UUID cannot exist."""

from __future__ import annotations

from uuid import UUID


def parse_id(value: UUID | str | None) -> UUID | None:
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None
