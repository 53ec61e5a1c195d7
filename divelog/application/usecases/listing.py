"""
Listing query parsing shared by user and dive log listings.

Every parameter is validated before any repository call, so a malformed
bound or sort field never reaches persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping, Optional

from ...domain.entities import SortSpec
from .results import ServiceError, validation_error

TRUTHY = {"true", "1", "yes", "on"}


@dataclass(frozen=True)
class ListingOptions:
    sort: SortSpec
    max_amount: Optional[int] = None
    active_users_only: bool = True
    start_from: Optional[datetime] = None
    start_to: Optional[datetime] = None

    def truncate(self, items: list) -> list:
        if self.max_amount is None:
            return items
        return items[: self.max_amount]


@dataclass(frozen=True)
class ListingQuery:
    """Raw query string values as received."""

    max_amount: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    active_users_only: Optional[str] = None
    ts_start: Optional[str] = None
    ts_end: Optional[str] = None


def parse_bool_flag(raw: Optional[str], default: bool = True) -> bool:
    if raw is None or not raw.strip():
        return default
    # R: Anything not truthy disables the flag.
    return raw.strip().lower() in TRUTHY


def parse_timestamp(raw: str) -> Optional[datetime]:
    """ISO 8601 datetime (or date) -> aware datetime; None when unparseable."""
    try:
        parsed = datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_listing_query(
    query: ListingQuery,
    sort_fields: Mapping[str, str],
    *,
    with_time_bounds: bool = False,
) -> tuple[ListingOptions | None, ServiceError | None]:
    start_from = start_to = None
    if with_time_bounds:
        if query.ts_start:
            start_from = parse_timestamp(query.ts_start)
            if start_from is None:
                return None, validation_error(
                    "Invalid tsStart format. Please provide a valid datetime string."
                )
        if query.ts_end:
            start_to = parse_timestamp(query.ts_end)
            if start_to is None:
                return None, validation_error(
                    "Invalid tsEnd format. Please provide a valid datetime string."
                )

    sort_by = query.sort_by or "createdAt"
    attribute = sort_fields.get(sort_by)
    if attribute is None:
        allowed = ", ".join(sorted(sort_fields))
        return None, validation_error(
            f'Invalid sortBy "{sort_by}". Allowed values: {allowed}'
        )

    sort_order = (query.sort_order or "desc").strip().lower()
    if sort_order not in ("asc", "desc"):
        return None, validation_error('Invalid sortOrder. Allowed values: asc, desc')

    max_amount = None
    if query.max_amount not in (None, ""):
        try:
            max_amount = int(query.max_amount)
        except ValueError:
            max_amount = -1
        if max_amount < 0:
            return None, validation_error(
                "Invalid maxAmount. Please provide a non-negative integer."
            )
        # R: 0 means no limit.
        max_amount = max_amount or None

    return (
        ListingOptions(
            sort=SortSpec(field=attribute, descending=sort_order == "desc"),
            max_amount=max_amount,
            active_users_only=parse_bool_flag(query.active_users_only),
            start_from=start_from,
            start_to=start_to,
        ),
        None,
    )
