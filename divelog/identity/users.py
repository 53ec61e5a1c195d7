"""
===============================================================================
CRC CARD: identity/users.py
===============================================================================

Module:
    User and role record models

Responsibilities:
    - Define the RoleRecord persisted for each role name.
    - Define the User dataclass shared by auth flows and user management.

Collaborators:
    - identity/auth_users.py: resolves the current User from a JWT.
    - infrastructure/repositories: map rows/documents -> User, RoleRecord.
    - api/schemas.py: renders User without its password hash.

Notes:
    - Data shapes only, no business logic.
    - role is None when the user's role record was deleted.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from .roles import Role


@dataclass(frozen=True, slots=True)
class RoleRecord:
    """Persisted role: a unique name plus a description."""

    id: UUID
    name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def level(self) -> Role:
        return Role.for_name(self.name)


@dataclass(frozen=True, slots=True)
class User:
    """User account as stored."""

    id: UUID
    email: str
    full_name: str
    password_hash: str
    role: RoleRecord | None
    enabled: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def role_level(self) -> Role | None:
        return self.role.level if self.role is not None else None
