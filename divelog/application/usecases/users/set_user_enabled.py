"""
===============================================================================
USE CASE: Enable / Disable User
===============================================================================

Idempotent toggle of the enabled flag. An account already in the requested
state answers with an "already" message and is not written.

Rules:
  - basic_user: "Forbidden!"
  - super admin targets: never toggled.
  - admin: basic-level targets only.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.access_policy import (
    Principal,
    TargetUser,
    can_manage_users,
    can_toggle_user_enabled,
)
from ....domain.repositories import UserRepository
from ..denials import log_denial
from ..identifiers import parse_id
from ..results import MessageResult, forbidden, user_not_found

NO_ACCESS_MESSAGE = "You have no access to this resource!"


class SetUserEnabledUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(
        self, actor: Principal, user_id: UUID | str, *, enabled: bool
    ) -> MessageResult:
        operation = "enable_user" if enabled else "disable_user"
        verb = "enabled" if enabled else "disabled"

        gate = can_manage_users(actor)
        if not gate:
            log_denial(actor, operation, gate)
            return MessageResult(error=forbidden("Forbidden!"))

        target_id = parse_id(user_id)
        user = self._users.get_user(target_id) if target_id else None
        if user is None or user.role is None:
            return MessageResult(error=user_not_found(user_id))

        decision = can_toggle_user_enabled(actor, TargetUser.of(user))
        if not decision:
            log_denial(actor, operation, decision)
            return MessageResult(error=forbidden(NO_ACCESS_MESSAGE))

        if user.enabled == enabled:
            return MessageResult(message=f'User with id "{user_id}" is already {verb}!')

        if self._users.update_user(user.id, enabled=enabled) is None:
            return MessageResult(error=user_not_found(user_id))
        return MessageResult(message=f'User with id "{user_id}" {verb}!')
