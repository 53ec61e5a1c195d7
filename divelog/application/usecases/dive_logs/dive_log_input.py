"""Dive log payload as received, and its validation into DiveLogData."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ....domain.entities import DiveLogData, TankMaterial
from ..results import ServiceError, validation_error

MANDATORY_FIELDS_MESSAGE = (
    "The fields startTime, endTime, maxDepth and location are mandatory!"
)


def _aware(value: datetime) -> datetime:
    """R: Naive timestamps are taken as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class DiveLogInput:
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


def build_dive_log_data(
    payload: DiveLogInput,
) -> tuple[DiveLogData | None, ServiceError | None]:
    location = (payload.location or "").strip()
    if (
        payload.start_time is None
        or payload.end_time is None
        or payload.max_depth is None
        or not location
    ):
        return None, validation_error(MANDATORY_FIELDS_MESSAGE)

    tank_material = None
    if payload.tank_material is not None:
        try:
            tank_material = TankMaterial(payload.tank_material)
        except ValueError:
            return None, validation_error(
                "Please enter a valid tank material from the list: "
                + ", ".join(TankMaterial.names())
            )

    return (
        DiveLogData(
            start_time=_aware(payload.start_time),
            end_time=_aware(payload.end_time),
            max_depth=payload.max_depth,
            location=location,
            avg_depth=payload.avg_depth,
            water_temperature=payload.water_temperature,
            air_temperature=payload.air_temperature,
            tank_material=tank_material,
            tank_volume=payload.tank_volume,
            tank_start_pressure=payload.tank_start_pressure,
            tank_end_pressure=payload.tank_end_pressure,
            water_body=payload.water_body,
            visibility=payload.visibility,
            additional_info=payload.additional_info,
        ),
        None,
    )
