"""
===============================================================================
CRC CARD: domain/entities.py
===============================================================================

Module:
    Domain entities (DiveLog, owner reference, sort options)

Responsibilities:
    - Define the dive log record and its editable payload.
    - Describe the owner of a log as seen by the access policy.
    - Whitelist the attributes listings may be sorted by.

Collaborators:
    - domain.repositories: persist/retrieve these entities.
    - domain.access_policy: reads DiveLogOwnerRef.
    - application/usecases: build/consume these entities.

Principles:
    - No DB/FastAPI dependencies.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID

from ..identity.roles import Role


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TankMaterial(str, Enum):
    ALUMINIUM = "Aluminium"
    STEEL = "Steel"

    @classmethod
    def names(cls) -> list[str]:
        return sorted(m.value for m in cls)


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Attribute (storage name) and direction for a listing."""

    field: str = "created_at"
    descending: bool = True


# camelCase query value -> entity attribute
USER_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "email": "email",
    "fullName": "full_name",
    "enabled": "enabled",
}

LOG_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "startTime": "start_time",
    "endTime": "end_time",
    "maxDepth": "max_depth",
    "avgDepth": "avg_depth",
    "waterTemperature": "water_temperature",
    "airTemperature": "air_temperature",
    "tankMaterial": "tank_material",
    "tankVolume": "tank_volume",
    "tankStartPressure": "tank_start_pressure",
    "tankEndPressure": "tank_end_pressure",
    "waterBody": "water_body",
    "location": "location",
    "visibility": "visibility",
}


@dataclass(frozen=True, slots=True)
class DiveLogOwnerRef:
    """
    Owner of a dive log, resolved at read time.

    id is None for an orphaned log (owner deleted). role is None when the
    owner no longer exists or their role record no longer resolves.
    """

    id: Optional[UUID] = None
    role: Optional[Role] = None
    enabled: Optional[bool] = None

    @property
    def is_orphaned(self) -> bool:
        return self.id is None or self.role is None


ORPHANED_OWNER = DiveLogOwnerRef()


@dataclass(frozen=True, slots=True)
class DiveLogData:
    """Editable payload of a dive log."""

    start_time: datetime
    end_time: datetime
    max_depth: float
    location: str
    avg_depth: Optional[float] = None
    water_temperature: Optional[float] = None
    air_temperature: Optional[float] = None
    tank_material: Optional[TankMaterial] = None
    tank_volume: Optional[float] = None
    tank_start_pressure: Optional[float] = None
    tank_end_pressure: Optional[float] = None
    water_body: Optional[str] = None
    visibility: Optional[float] = None
    additional_info: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DiveLog:
    """Stored dive log with its owner reference populated."""

    id: UUID
    owner_user_id: Optional[UUID]
    data: DiveLogData
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    owner: DiveLogOwnerRef = ORPHANED_OWNER
