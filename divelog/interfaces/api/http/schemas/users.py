"""
===============================================================================
CRC CARD: schemas/users.py
===============================================================================

Module:
    HTTP schemas for user accounts, login and self-service

Responsibilities:
    - Request DTOs (every field optional; mandatory checks and their messages
      belong to the use cases).
    - UserRes never carries the password hash.

Collaborators:
    - identity.users.User
    - schemas.roles.RoleRes
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from divelog.identity.users import User

from .common import CamelModel
from .roles import RoleRes


class CreateUserReq(CamelModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    password: Optional[str] = None
    role_name: Optional[str] = Field(
        default=None,
        description=(
            "Role name, default basic_user. Admins may only request basic_user;"
            " super admins may request any role."
        ),
    )


class UpdateUserReq(CamelModel):
    full_name: Optional[str] = None
    enabled: Optional[bool] = None


class UpdateMeReq(CamelModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    password: Optional[str] = None


class LoginReq(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserRes(CamelModel):
    id: UUID
    email: str
    full_name: str
    role: Optional[RoleRes] = None
    enabled: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def of(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            role=RoleRes.of(user.role) if user.role is not None else None,
            enabled=user.enabled,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UserEnvelope(CamelModel):
    data: UserRes


class UserListEnvelope(CamelModel):
    data: List[UserRes]
