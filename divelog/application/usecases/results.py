"""
===============================================================================
USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Use Case Results

Business Goal:
    Shared result and error models for user, role, dive log and login use
    cases, with one explicit contract for validation, authorization, missing
    resources and uniqueness conflicts.

Why (Context):
    - Use cases return typed results instead of raising outwards, which keeps
      HTTP mapping in one place and makes flows easy to unit test.
    - The message travels with the code: clients see it verbatim in "detail".

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    results models (module)

Responsibilities:
    - Define ServiceErrorCode categories.
    - Represent ServiceError (code + message).
    - Represent single, list, message and token results.

Collaborators:
    - identity.users (User, RoleRecord)
    - domain.entities (DiveLog)
    - api.error_mapping (code -> HTTP status)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ...domain.entities import DiveLog
from ...identity.users import RoleRecord, User


class ServiceErrorCode(str, Enum):
    """
    Codes:
      - VALIDATION_ERROR: missing or malformed input (422)
      - UNAUTHORIZED: credentials rejected (401)
      - FORBIDDEN: actor not allowed (403)
      - NOT_FOUND: resource missing (404)
      - CONFLICT: duplicate role name (409)
      - DUPLICATE: duplicate user email (400)
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DUPLICATE = "DUPLICATE"


@dataclass(frozen=True)
class ServiceError:
    code: ServiceErrorCode
    message: str


def validation_error(message: str) -> ServiceError:
    return ServiceError(ServiceErrorCode.VALIDATION_ERROR, message)


def forbidden(message: str) -> ServiceError:
    return ServiceError(ServiceErrorCode.FORBIDDEN, message)


def not_found(message: str) -> ServiceError:
    return ServiceError(ServiceErrorCode.NOT_FOUND, message)


ACCESS_DENIED_MESSAGE = "You are not allowed to access this resource!"


def access_denied() -> ServiceError:
    return forbidden(ACCESS_DENIED_MESSAGE)


def user_not_found(user_id) -> ServiceError:
    return not_found(f'User with id "{user_id}" not found!')


@dataclass
class UserResult:
    user: User | None = None
    error: ServiceError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    error: ServiceError | None = None


@dataclass
class RoleResult:
    role: RoleRecord | None = None
    error: ServiceError | None = None


@dataclass
class RoleListResult:
    roles: List[RoleRecord] = field(default_factory=list)
    error: ServiceError | None = None


@dataclass
class DiveLogResult:
    log: DiveLog | None = None
    error: ServiceError | None = None


@dataclass
class DiveLogListResult:
    logs: List[DiveLog] = field(default_factory=list)
    error: ServiceError | None = None


@dataclass
class MessageResult:
    """Commands answering with a human message (delete, enable, no-op)."""

    message: str | None = None
    error: ServiceError | None = None


@dataclass
class TokenResult:
    token: str | None = None
    error: ServiceError | None = None
