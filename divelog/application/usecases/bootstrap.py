"""
===============================================================================
USE CASE: Bootstrap (built-in roles + initial account)
===============================================================================

Run at startup and from scripts/create_super_admin.py. Both steps are
idempotent: existing roles and accounts are left untouched.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ...crosscutting.logger import logger
from ...domain.repositories import RoleRepository, UserRepository
from ...identity.credentials import hash_password
from ...identity.roles import BUILTIN_ROLE_DESCRIPTIONS, Role
from ...identity.users import User


def seed_builtin_roles(roles: RoleRepository) -> int:
    """Create missing built-in role records. Returns how many were created."""
    created = 0
    for role, description in BUILTIN_ROLE_DESCRIPTIONS.items():
        if roles.get_role_by_name(role.value) is None:
            roles.create_role(name=role.value, description=description)
            created += 1
    if created:
        logger.info("built-in roles seeded", extra={"roles_created": created})
    return created


@dataclass(frozen=True)
class EnsureUserResult:
    user: User
    created: bool


def ensure_user(
    users: UserRepository,
    roles: RoleRepository,
    *,
    email: str,
    password: str,
    full_name: str,
    role: Role = Role.SUPER_ADMIN,
) -> EnsureUserResult:
    """
    Create the account unless the email is taken.

    Raises:
        ValueError: role record missing (seed_builtin_roles not run).
    """
    normalized_email = email.strip().lower()
    existing = users.get_user_by_email(normalized_email)
    if existing is not None:
        return EnsureUserResult(user=existing, created=False)

    role_record = roles.get_role_by_name(role.value)
    if role_record is None:
        raise ValueError(f'Role with name "{role.value}" not found')

    user = users.create_user(
        email=normalized_email,
        full_name=full_name.strip(),
        password_hash=hash_password(password),
        role_id=role_record.id,
    )
    logger.info(
        "bootstrap user created", extra={"user_id": str(user.id), "role": role.value}
    )
    return EnsureUserResult(user=user, created=True)


def bootstrap(
    users: UserRepository,
    roles: RoleRepository,
    *,
    seed_email: str = "",
    seed_password: str = "",
    seed_full_name: str = "Super Admin",
) -> None:
    seed_builtin_roles(roles)
    if seed_email.strip() and seed_password:
        ensure_user(
            users,
            roles,
            email=seed_email,
            password=seed_password,
            full_name=seed_full_name,
        )
