"""
===============================================================================
USE CASE: Delete User
===============================================================================

Nobody deletes themselves here. Dive logs of the deleted user are kept and
become orphaned.
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.access_policy import (
    DENY_SELF,
    Principal,
    TargetUser,
    can_delete_user,
    can_manage_users,
    is_self_target,
)
from ....domain.repositories import UserRepository
from ..denials import log_denial
from ..identifiers import parse_id
from ..results import MessageResult, access_denied, forbidden, user_not_found


class DeleteUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, actor: Principal, user_id: UUID | str) -> MessageResult:
        gate = can_manage_users(actor)
        if not gate:
            log_denial(actor, "delete_user", gate)
            return MessageResult(error=access_denied())

        target_id = parse_id(user_id)
        if target_id is not None and is_self_target(actor, target_id):
            log_denial(actor, "delete_user", DENY_SELF)
            return MessageResult(error=forbidden("You can't delete yourself!"))

        user = self._users.get_user(target_id) if target_id else None
        if user is None or user.role is None:
            return MessageResult(error=user_not_found(user_id))

        decision = can_delete_user(actor, TargetUser.of(user))
        if not decision:
            log_denial(actor, "delete_user", decision)
            return MessageResult(error=access_denied())

        if not self._users.delete_user(user.id):
            return MessageResult(error=user_not_found(user_id))

        logger.info(
            "user deleted",
            extra={"actor_id": str(actor.id), "target_id": str(user.id)},
        )
        return MessageResult(message=f'User with id "{user_id}" deleted!')
