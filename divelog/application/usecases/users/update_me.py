"""
===============================================================================
USE CASE: Update Myself
===============================================================================

Any authenticated user may change their own email, full name or password,
whatever their role. Role and enabled flag are never touched here.
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from ....identity.credentials import hash_password
from ....identity.users import User
from ..results import (
    MessageResult,
    ServiceError,
    ServiceErrorCode,
    UserResult,
    user_not_found,
)
from .user_validation import check_email, check_password, normalize_email

NOTHING_CHANGED_MESSAGE = "Nothing changed!"


class UpdateMeUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(
        self,
        current_user: User,
        *,
        email: str | None = None,
        full_name: str | None = None,
        password: str | None = None,
    ) -> UserResult | MessageResult:
        full_name = (full_name or "").strip() or None
        normalized_email = normalize_email(email) or None
        if not normalized_email and not full_name and not password:
            return MessageResult(message=NOTHING_CHANGED_MESSAGE)

        if normalized_email is not None:
            error = check_email(normalized_email)
            if error is not None:
                return UserResult(error=error)
            existing = self._users.get_user_by_email(normalized_email)
            if existing is not None and existing.id != current_user.id:
                return UserResult(
                    error=ServiceError(
                        ServiceErrorCode.DUPLICATE,
                        "User with this email already exists!",
                    )
                )

        if password:
            error = check_password(password)
            if error is not None:
                return UserResult(error=error)

        updated = self._users.update_user(
            current_user.id,
            email=normalized_email,
            full_name=full_name,
            password_hash=hash_password(password) if password else None,
        )
        if updated is None:
            return UserResult(error=user_not_found(current_user.id))
        return UserResult(user=updated)
