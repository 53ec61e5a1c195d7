"""
===============================================================================
USE CASE: Create User
===============================================================================

Business Goal:
    Let admins and super admins register accounts. Admins only create basic
    users; super admins may assign any existing role.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Gate the operation by role.
    - Validate mandatory fields, email format and password length.
    - Enforce the requested role against the actor's level.
    - Reject duplicate emails and unknown role names.
    - Hash the password and persist the user.

Collaborators:
    - UserRepository, RoleRepository
    - access_policy.can_create_user / resolve_new_user_role_name
    - identity.credentials.hash_password
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.access_policy import (
    Principal,
    can_create_user,
    resolve_new_user_role_name,
)
from ....domain.repositories import RoleRepository, UserRepository
from ....identity.credentials import hash_password
from ..denials import log_denial
from ..results import (
    ServiceError,
    ServiceErrorCode,
    UserResult,
    access_denied,
    not_found,
    validation_error,
)
from .user_validation import check_email, check_password, normalize_email


class CreateUserUseCase:
    def __init__(
        self, user_repository: UserRepository, role_repository: RoleRepository
    ) -> None:
        self._users = user_repository
        self._roles = role_repository

    def execute(
        self,
        actor: Principal,
        *,
        email: str | None,
        full_name: str | None,
        password: str | None,
        role_name: str | None = None,
    ) -> UserResult:
        gate = can_create_user(actor, None)
        if not gate:
            log_denial(actor, "create_user", gate)
            return UserResult(error=access_denied())

        full_name = (full_name or "").strip()
        if not email or not full_name or not password:
            return UserResult(
                error=validation_error(
                    "The fields email, fullName, and password are mandatory!"
                )
            )

        normalized_email = normalize_email(email)
        error = check_email(normalized_email) or check_password(password)
        if error is not None:
            return UserResult(error=error)

        requested_role = (role_name or "").strip() or None
        decision = can_create_user(actor, requested_role)
        if not decision:
            log_denial(actor, "create_user", decision)
            return UserResult(error=access_denied())

        if self._users.get_user_by_email(normalized_email) is not None:
            return UserResult(
                error=ServiceError(
                    ServiceErrorCode.DUPLICATE, "User with this email already exists!"
                )
            )

        use_role_name = resolve_new_user_role_name(actor, requested_role)
        role = self._roles.get_role_by_name(use_role_name)
        if role is None:
            return UserResult(
                error=not_found(f'Role with name "{use_role_name}" not found!')
            )

        user = self._users.create_user(
            email=normalized_email,
            full_name=full_name,
            password_hash=hash_password(password),
            role_id=role.id,
        )
        logger.info(
            "user created",
            extra={"actor_id": str(actor.id), "target_id": str(user.id)},
        )
        return UserResult(user=user)
