"""
===============================================================================
CRC CARD: domain/access_policy.py
===============================================================================

Module:
    Access policy for users and dive logs

Responsibilities:
    - Pure rules deciding every (actor role, target, operation) combination.
    - Return an AccessDecision carrying the deny reason.
    - Describe how log listings are filtered per role.

Collaborators:
    - identity.roles.Role (privilege levels)
    - domain.entities.DiveLog / DiveLogOwnerRef
    - application.usecases: call these before reading or mutating.

Rules (intent):
    - basic_user manages no other account and sees only their own logs.
    - admin manages basic-level accounts and their logs, plus orphaned logs.
    - super_admin manages everything except super_admin accounts.
    - Nobody deletes themselves through the management path.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from ..identity.roles import Role, is_basic_level
from ..identity.users import User
from .entities import DiveLog, DiveLogOwnerRef


class DenyReason(str, Enum):
    FORBIDDEN_ROLE = "forbidden-role"
    FORBIDDEN_SELF = "forbidden-self"
    FORBIDDEN_HIERARCHY = "forbidden-hierarchy"


@dataclass(frozen=True, slots=True)
class AccessDecision:
    allowed: bool
    reason: Optional[DenyReason] = None

    def __bool__(self) -> bool:
        return self.allowed


ALLOW = AccessDecision(True)
DENY_ROLE = AccessDecision(False, DenyReason.FORBIDDEN_ROLE)
DENY_SELF = AccessDecision(False, DenyReason.FORBIDDEN_SELF)
DENY_HIERARCHY = AccessDecision(False, DenyReason.FORBIDDEN_HIERARCHY)


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated actor of the current request."""

    id: UUID
    role: Role
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class TargetUser:
    """User an operation is aimed at. role is None when it does not resolve."""

    id: UUID
    role: Optional[Role]
    enabled: bool = True

    @classmethod
    def of(cls, user: User) -> "TargetUser":
        return cls(id=user.id, role=user.role_level, enabled=user.enabled)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def can_manage_users(actor: Principal) -> AccessDecision:
    """Gate shared by every cross-user operation."""
    if actor.role in (Role.ADMIN, Role.SUPER_ADMIN):
        return ALLOW
    return DENY_ROLE


def can_create_user(
    actor: Principal, requested_role_name: Optional[str] = None
) -> AccessDecision:
    """
    Admins only create basic users; asking for another role is denied.
    Super admins may request any role.
    """
    gate = can_manage_users(actor)
    if not gate:
        return gate
    if actor.role == Role.SUPER_ADMIN:
        return ALLOW
    if requested_role_name in (None, Role.BASIC_USER.value):
        return ALLOW
    return DENY_ROLE


def resolve_new_user_role_name(
    actor: Principal, requested_role_name: Optional[str] = None
) -> str:
    if actor.role == Role.SUPER_ADMIN and requested_role_name:
        return requested_role_name
    return Role.BASIC_USER.value


def can_list_users(actor: Principal) -> AccessDecision:
    return can_manage_users(actor)


def is_user_listed(actor: Principal, target_role: Optional[Role]) -> bool:
    """Post-query visibility of one account in a user listing."""
    if target_role is None:
        return False
    if actor.role == Role.SUPER_ADMIN:
        return True
    if actor.role == Role.ADMIN:
        return is_basic_level(target_role)
    return False


def is_self_target(actor: Principal, target_id: UUID) -> bool:
    return actor.id == target_id


def _manages(actor: Principal, target: TargetUser) -> AccessDecision:
    """Hierarchy shared by update, delete and enable/disable."""
    if target.role is None:
        return DENY_HIERARCHY
    if actor.role == Role.SUPER_ADMIN:
        if target.role == Role.SUPER_ADMIN:
            return DENY_HIERARCHY
        return ALLOW
    if actor.role == Role.ADMIN and is_basic_level(target.role):
        return ALLOW
    return DENY_HIERARCHY


def can_read_user(actor: Principal, target: TargetUser) -> AccessDecision:
    gate = can_manage_users(actor)
    if not gate:
        return gate
    if actor.role == Role.SUPER_ADMIN:
        return ALLOW if target.role is not None else DENY_HIERARCHY
    # R: Admins read themselves through /me only.
    if is_self_target(actor, target.id):
        return DENY_SELF
    if is_basic_level(target.role):
        return ALLOW
    return DENY_HIERARCHY


def can_update_user(actor: Principal, target: TargetUser) -> AccessDecision:
    gate = can_manage_users(actor)
    if not gate:
        return gate
    return _manages(actor, target)


def can_delete_user(actor: Principal, target: TargetUser) -> AccessDecision:
    gate = can_manage_users(actor)
    if not gate:
        return gate
    if is_self_target(actor, target.id):
        return DENY_SELF
    return _manages(actor, target)


def can_toggle_user_enabled(actor: Principal, target: TargetUser) -> AccessDecision:
    gate = can_manage_users(actor)
    if not gate:
        return gate
    return _manages(actor, target)


# ---------------------------------------------------------------------------
# Dive logs
# ---------------------------------------------------------------------------


def can_create_log_for(
    actor: Principal, target: Optional[TargetUser]
) -> AccessDecision:
    """
    Delegated creation. target is None when the payload names no user.
    Basic users always log for themselves, so any target is ignored.
    """
    if actor.role == Role.BASIC_USER or target is None:
        return ALLOW
    if actor.role == Role.SUPER_ADMIN:
        return ALLOW
    if is_self_target(actor, target.id) or is_basic_level(target.role):
        return ALLOW
    return DENY_HIERARCHY


def resolve_log_owner(actor: Principal, target: Optional[TargetUser]) -> UUID:
    if actor.role == Role.BASIC_USER or target is None:
        return actor.id
    return target.id


def owns_log(actor: Principal, log: DiveLog) -> bool:
    return log.owner_user_id is not None and actor.id == log.owner_user_id


def can_access_log(actor: Principal, log: DiveLog) -> AccessDecision:
    """Read, update and delete of a single log."""
    if actor.role == Role.SUPER_ADMIN:
        return ALLOW
    if owns_log(actor, log):
        return ALLOW
    if actor.role == Role.ADMIN:
        owner = log.owner
        if owner.is_orphaned or is_basic_level(owner.role):
            return ALLOW
        return DENY_HIERARCHY
    return DENY_ROLE


@dataclass(frozen=True, slots=True)
class LogListingPlan:
    """
    How a log listing is narrowed for an actor.

    owner_user_id: pushed into the query (basic users).
    post_filter: rows are checked with is_log_listed after the query.
    """

    owner_user_id: Optional[UUID]
    post_filter: bool


def plan_log_listing(actor: Principal) -> LogListingPlan:
    if actor.role == Role.BASIC_USER:
        return LogListingPlan(owner_user_id=actor.id, post_filter=False)
    return LogListingPlan(owner_user_id=None, post_filter=True)


def _owner_is_active(owner: DiveLogOwnerRef) -> bool:
    return not owner.is_orphaned and owner.enabled is True


def is_log_listed(
    actor: Principal, log: DiveLog, *, active_users_only: bool
) -> bool:
    """Post-query visibility of one log in a listing."""
    if active_users_only and not _owner_is_active(log.owner):
        return False
    return bool(can_access_log(actor, log))
