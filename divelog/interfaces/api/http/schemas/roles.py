"""
===============================================================================
CRC CARD: schemas/roles.py
===============================================================================

Module:
    HTTP schemas for role records

Responsibilities:
    - Request DTOs for create/update (fields optional: the use case reports
      missing ones with its own message).
    - Response DTOs wrapped in {data}.

Collaborators:
    - identity.users.RoleRecord
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from divelog.identity.users import RoleRecord

from .common import CamelModel


class CreateRoleReq(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class UpdateRoleReq(CamelModel):
    description: Optional[str] = None


class RoleRes(CamelModel):
    id: UUID
    name: str
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def of(cls, role: RoleRecord) -> "RoleRes":
        return cls(
            id=role.id,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
            updated_at=role.updated_at,
        )


class RoleEnvelope(CamelModel):
    data: RoleRes


class RoleListEnvelope(CamelModel):
    data: List[RoleRes]
