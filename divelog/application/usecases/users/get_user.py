"""
===============================================================================
USE CASE: Get User
===============================================================================

Rules:
  - Basic users cannot read other accounts.
  - Admins cannot read themselves here (they use /me) and only read
    basic-level accounts.
  - Super admins read any account.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....domain.access_policy import (
    DENY_SELF,
    Principal,
    TargetUser,
    can_manage_users,
    can_read_user,
    is_self_target,
)
from ....domain.repositories import UserRepository
from ....identity.roles import Role
from ..denials import log_denial
from ..identifiers import parse_id
from ..results import UserResult, access_denied, user_not_found


class GetUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Principal, user_id: UUID | str) -> UserResult:
        gate = can_manage_users(actor)
        if not gate:
            log_denial(actor, "read_user", gate)
            return UserResult(error=access_denied())

        target_id = parse_id(user_id)
        if actor.role == Role.ADMIN and target_id and is_self_target(actor, target_id):
            log_denial(actor, "read_user", DENY_SELF)
            return UserResult(error=access_denied())

        user = self._users.get_user(target_id) if target_id else None
        if user is None or user.role is None:
            return UserResult(error=user_not_found(user_id))

        decision = can_read_user(actor, TargetUser.of(user))
        if not decision:
            log_denial(actor, "read_user", decision)
            return UserResult(error=access_denied())

        return UserResult(user=user)

