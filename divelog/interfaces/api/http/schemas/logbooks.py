"""HTTP schemas for dive logs (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from divelog.application.usecases import DiveLogInput
from divelog.domain.entities import DiveLog

from .common import CamelModel


class DiveLogReq(CamelModel):
    """
    Create/update body. Every field is optional here: missing mandatory
    fields are reported by the use case; wrong types still fail with 422.
    """

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    max_depth: Optional[float] = None
    location: Optional[str] = None
    avg_depth: Optional[float] = None
    water_temperature: Optional[float] = None
    air_temperature: Optional[float] = None
    tank_material: Optional[str] = None
    tank_volume: Optional[float] = None
    tank_start_pressure: Optional[float] = None
    tank_end_pressure: Optional[float] = None
    water_body: Optional[str] = None
    visibility: Optional[float] = None
    additional_info: Optional[str] = None
    add_user: Optional[str] = Field(
        default=None, description="Owner user id (create only)"
    )

    def to_input(self) -> DiveLogInput:
        return DiveLogInput(**self.model_dump(exclude={"add_user"}))


class DiveLogRes(CamelModel):
    id: UUID
    user_id: Optional[UUID] = None
    start_time: datetime
    end_time: datetime
    max_depth: float
    location: str
    avg_depth: Optional[float] = None
    water_temperature: Optional[float] = None
    air_temperature: Optional[float] = None
    tank_material: Optional[str] = None
    tank_volume: Optional[float] = None
    tank_start_pressure: Optional[float] = None
    tank_end_pressure: Optional[float] = None
    water_body: Optional[str] = None
    visibility: Optional[float] = None
    additional_info: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def of(cls, log: DiveLog) -> "DiveLogRes":
        data = log.data
        return cls(
            id=log.id,
            user_id=log.owner_user_id,
            start_time=data.start_time,
            end_time=data.end_time,
            max_depth=data.max_depth,
            location=data.location,
            avg_depth=data.avg_depth,
            water_temperature=data.water_temperature,
            air_temperature=data.air_temperature,
            tank_material=data.tank_material.value if data.tank_material else None,
            tank_volume=data.tank_volume,
            tank_start_pressure=data.tank_start_pressure,
            tank_end_pressure=data.tank_end_pressure,
            water_body=data.water_body,
            visibility=data.visibility,
            additional_info=data.additional_info,
            created_at=log.created_at,
            updated_at=log.updated_at,
        )


class DiveLogEnvelope(CamelModel):
    data: DiveLogRes


class DiveLogListEnvelope(CamelModel):
    data: List[DiveLogRes]
