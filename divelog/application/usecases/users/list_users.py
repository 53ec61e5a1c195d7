"""
===============================================================================
USE CASE: List Users
===============================================================================

Super admins see every account; admins only see basic-level accounts (not
even their own). Accounts whose role no longer resolves are never listed.

Collaborators:
    - UserRepository.list_users(enabled_only, sort)
    - access_policy.can_list_users / is_user_listed
    - listing.parse_listing_query
===============================================================================
"""

from __future__ import annotations

from ....domain.access_policy import Principal, can_list_users, is_user_listed
from ....domain.entities import USER_SORT_FIELDS
from ....domain.repositories import UserRepository
from ..denials import log_denial
from ..listing import ListingQuery, parse_listing_query
from ..results import UserListResult, access_denied


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Principal, query: ListingQuery) -> UserListResult:
        decision = can_list_users(actor)
        if not decision:
            log_denial(actor, "list_users", decision)
            return UserListResult(error=access_denied())

        options, error = parse_listing_query(query, USER_SORT_FIELDS)
        if error is not None:
            return UserListResult(error=error)

        users = self._users.list_users(
            enabled_only=options.active_users_only, sort=options.sort
        )
        visible = [u for u in users if is_user_listed(actor, u.role_level)]
        return UserListResult(users=options.truncate(visible))
