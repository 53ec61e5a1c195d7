"""
===============================================================================
CRC CARD: dependencies.py (Shared router helpers)
===============================================================================

Responsibilities:
  - Read listing query parameters (camelCase) as raw strings.
  - Turn the authenticated User into the policy Principal.

Collaborators:
  - application.usecases.ListingQuery
  - identity.auth_users (require_user, to_principal)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Query

from ....application.usecases import ListingQuery
from ....domain.access_policy import Principal
from ....identity.auth_users import require_user, to_principal
from ....identity.users import User


def listing_query(
    max_amount: Optional[str] = Query(None, alias="maxAmount"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    active_users_only: Optional[str] = Query(None, alias="activeUsersOnly"),
) -> ListingQuery:
    # R: Raw strings; the use case validates and reports its own messages.
    return ListingQuery(
        max_amount=max_amount,
        sort_by=sort_by,
        sort_order=sort_order,
        active_users_only=active_users_only,
    )


def log_listing_query(
    base: ListingQuery = Depends(listing_query),
    ts_start: Optional[str] = Query(None, alias="tsStart"),
    ts_end: Optional[str] = Query(None, alias="tsEnd"),
) -> ListingQuery:
    return ListingQuery(
        max_amount=base.max_amount,
        sort_by=base.sort_by,
        sort_order=base.sort_order,
        active_users_only=base.active_users_only,
        ts_start=ts_start,
        ts_end=ts_end,
    )


def current_principal(user: User = Depends(require_user())) -> Principal:
    return to_principal(user)
