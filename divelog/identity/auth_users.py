"""
===============================================================================
CRC CARD: identity/auth_users.py
===============================================================================

Module:
    Current user resolution (JWT -> User -> Principal)

Responsibilities:
    - Extract the token from Authorization: Bearer.
    - Resolve the current user (token -> user_id -> repository).
    - Reject missing, unknown, role-less and disabled accounts.
    - Expose FastAPI dependencies (require_user, require_role).

Collaborators:
    - identity.credentials: token decoding.
    - container.get_user_repository: user lookup.
    - crosscutting.error_responses: unauthorized/forbidden.
    - context.user_id_var: log correlation.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..container import get_user_repository
from ..context import user_id_var
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.access_policy import Principal
from ..domain.repositories import UserRepository
from .credentials import decode_access_token
from .roles import Role
from .users import User

TOKEN_MISSING_MESSAGE = "Token is missing!"
USER_NOT_FOUND_MESSAGE = "User not found!"
ACCOUNT_DISABLED_MESSAGE = "The account has been disabled!"


_bearer_scheme = HTTPBearer(auto_error=False)


def resolve_user(token: str | None, users: UserRepository) -> User:
    """Token -> enabled user with a resolvable role, or the matching HTTP error."""
    if not token:
        raise unauthorized(TOKEN_MISSING_MESSAGE)

    user_id = decode_access_token(token)

    user = users.get_user(user_id)
    # R: A user whose role record is gone counts as nonexistent.
    if user is None or user.role is None:
        raise unauthorized(USER_NOT_FOUND_MESSAGE)
    if not user.enabled:
        logger.warning("auth rejected: account disabled", extra={"user_id": str(user.id)})
        raise forbidden(ACCOUNT_DISABLED_MESSAGE)
    return user


def to_principal(user: User) -> Principal:
    return Principal(id=user.id, role=user.role_level, enabled=user.enabled)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def _current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    user = resolve_user(
        credentials.credentials.strip() if credentials else None, users
    )
    request.state.user = user
    user_id_var.set(str(user.id))
    return user


def require_user() -> Callable:
    """Dependency: authenticated, enabled user."""
    return _current_user


def require_role(role: Role | str) -> Callable:
    """Dependency: authenticated user holding exactly this role."""
    required_role = Role(role)

    def dependency(user: User = Depends(_current_user)) -> User:
        if user.role_level != required_role:
            raise forbidden("Forbidden!")
        return user

    return dependency
