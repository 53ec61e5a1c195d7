"""
===============================================================================
CRC CARD: identity/roles.py
===============================================================================

Module:
    Role hierarchy (basic_user < admin < super_admin)

Responsibilities:
    - Define the closed set of privilege levels and their total order.
    - Resolve a persisted role name to its privilege level.
    - Hold the descriptions used when the built-in roles are seeded.

Collaborators:
    - domain.access_policy: compares actor/target levels.
    - identity.users: RoleRecord.level.
    - application.usecases.bootstrap: seeds the built-in role records.

Notes:
    - Role names outside the built-in three carry basic-level privileges.
===============================================================================
"""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Privilege levels, ordered by rank."""

    BASIC_USER = "basic_user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def for_name(cls, name: str | None) -> "Role | None":
        """
        Privilege level of a persisted role name.

        None stays None (unresolvable role); unknown names map to BASIC_USER.
        """
        if name is None:
            return None
        try:
            return cls(name)
        except ValueError:
            return cls.BASIC_USER


_RANKS = {
    Role.BASIC_USER: 0,
    Role.ADMIN: 1,
    Role.SUPER_ADMIN: 2,
}

BUILTIN_ROLE_DESCRIPTIONS: dict[Role, str] = {
    Role.BASIC_USER: "Can manage only their own profile and dive logs.",
    Role.ADMIN: "Can manage basic users and their dive logs.",
    Role.SUPER_ADMIN: "Can manage every user, role and dive log.",
}


def rank(role: Role) -> int:
    return role.rank


def is_at_least(role: Role, threshold: Role) -> bool:
    return role.rank >= threshold.rank


def is_basic_level(role: Role | None) -> bool:
    return role == Role.BASIC_USER
