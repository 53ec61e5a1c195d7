"""
===============================================================================
USE CASE: Update User (management path)
===============================================================================

Overwrites fullName and, when provided, enabled. Email, password and role
are preserved.

Rules:
  - admin: basic-level targets only.
  - super_admin: any target except super admins.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.access_policy import (
    Principal,
    TargetUser,
    can_manage_users,
    can_update_user,
)
from ....domain.repositories import UserRepository
from ..denials import log_denial
from ..identifiers import parse_id
from ..results import UserResult, access_denied, user_not_found, validation_error


class UpdateUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(
        self,
        actor: Principal,
        user_id: UUID | str,
        *,
        full_name: str | None,
        enabled: bool | None = None,
    ) -> UserResult:
        gate = can_manage_users(actor)
        if not gate:
            log_denial(actor, "update_user", gate)
            return UserResult(error=access_denied())

        full_name = (full_name or "").strip()
        if not full_name:
            return UserResult(error=validation_error("The field fullName is mandatory!"))

        target_id = parse_id(user_id)
        user = self._users.get_user(target_id) if target_id else None
        if user is None or user.role is None:
            return UserResult(error=user_not_found(user_id))

        decision = can_update_user(actor, TargetUser.of(user))
        if not decision:
            log_denial(actor, "update_user", decision)
            return UserResult(error=access_denied())

        # R: enabled=False is applied too; only an absent value is skipped.
        updated = self._users.update_user(user.id, full_name=full_name, enabled=enabled)
        if updated is None:
            return UserResult(error=user_not_found(user_id))
        return UserResult(user=updated)
