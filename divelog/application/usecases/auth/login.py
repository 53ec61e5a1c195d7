"""
===============================================================================
USE CASE: Login
===============================================================================

Email + password -> signed access token.

Outcomes:
  - unknown email: NOT_FOUND "User not found!"
  - disabled account: FORBIDDEN "The account has been disabled!"
  - wrong password: UNAUTHORIZED "Invalid credentials!"
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.credentials import create_access_token, verify_password
from ..results import ServiceError, ServiceErrorCode, TokenResult, forbidden, not_found
from ..users.user_validation import normalize_email


class LoginUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, *, email: str | None, password: str | None) -> TokenResult:
        normalized_email = normalize_email(email)
        user = self._users.get_user_by_email(normalized_email) if normalized_email else None
        if user is None:
            return TokenResult(error=not_found("User not found!"))

        if not user.enabled:
            logger.warning("login rejected: account disabled", extra={"user_id": str(user.id)})
            return TokenResult(error=forbidden("The account has been disabled!"))

        if not verify_password(password or "", user.password_hash):
            logger.warning("login rejected: bad credentials", extra={"user_id": str(user.id)})
            return TokenResult(
                error=ServiceError(ServiceErrorCode.UNAUTHORIZED, "Invalid credentials!")
            )

        return TokenResult(token=create_access_token(user.id))
