"""
===============================================================================
CRC CARD: infrastructure/repositories/postgres/dive_log.py
===============================================================================

Class:
    PostgresDiveLogRepository

Responsibilities:
    - Persist dive logs.
    - Resolve the owner reference (id, role, enabled) with LEFT JOINs on
      users and roles so the access policy needs no extra queries.
    - Filter listings by owner and start time window.

Collaborators:
    - domain.repositories.DiveLogRepository (contract)
    - postgres.base.PostgresRepository (pool + error wrapping)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from psycopg import sql

from ....domain.entities import (
    ORPHANED_OWNER,
    DiveLog,
    DiveLogData,
    DiveLogOwnerRef,
    SortSpec,
    TankMaterial,
)
from ....identity.roles import Role
from .base import PostgresRepository, order_by

_DATA_COLUMNS = (
    "start_time",
    "end_time",
    "max_depth",
    "location",
    "avg_depth",
    "water_temperature",
    "air_temperature",
    "tank_material",
    "tank_volume",
    "tank_start_pressure",
    "tank_end_pressure",
    "water_body",
    "visibility",
    "additional_info",
)


def _data_params(data: DiveLogData) -> list:
    values = []
    for column in _DATA_COLUMNS:
        value = getattr(data, column)
        if isinstance(value, TankMaterial):
            value = value.value
        values.append(value)
    return values


def _row_to_log(row: tuple) -> DiveLog:
    # id, user_id, created_at, updated_at, <data>, owner id, enabled, role name
    data_values = dict(zip(_DATA_COLUMNS, row[4 : 4 + len(_DATA_COLUMNS)]))
    if data_values["tank_material"] is not None:
        data_values["tank_material"] = TankMaterial(data_values["tank_material"])
    owner_id, owner_enabled, role_name = row[4 + len(_DATA_COLUMNS) :]

    owner = ORPHANED_OWNER
    if owner_id is not None:
        owner = DiveLogOwnerRef(
            id=owner_id,
            role=Role.for_name(role_name),
            enabled=owner_enabled,
        )
    return DiveLog(
        id=row[0],
        owner_user_id=row[1],
        created_at=row[2],
        updated_at=row[3],
        data=DiveLogData(**data_values),
        owner=owner,
    )


class PostgresDiveLogRepository(PostgresRepository):
    _SELECT_COLUMNS = (
        "l.id, l.user_id, l.created_at, l.updated_at, "
        + ", ".join(f"l.{c}" for c in _DATA_COLUMNS)
        + ", u.id, u.enabled, r.name"
    )
    _FROM = (
        "FROM dive_logs l "
        "LEFT JOIN users u ON u.id = l.user_id "
        "LEFT JOIN roles r ON r.id = u.role_id"
    )

    def create_log(self, *, owner_user_id: UUID, data: DiveLogData) -> DiveLog:
        log_id = uuid4()
        columns = ", ".join(_DATA_COLUMNS)
        placeholders = ", ".join(["%s"] * len(_DATA_COLUMNS))
        self._execute(
            query=f"""
                INSERT INTO dive_logs (
                    id, user_id, {columns}, created_at, updated_at
                )
                VALUES (%s, %s, {placeholders}, NOW(), NOW())
            """,
            params=[log_id, owner_user_id, *_data_params(data)],
            context_msg="PostgresDiveLogRepository: Failed to create dive log",
            extra={"log_id": str(log_id), "user_id": str(owner_user_id)},
        )
        return self.get_log(log_id)

    def get_log(self, log_id: UUID) -> Optional[DiveLog]:
        row = self._fetchone(
            query=f"SELECT {self._SELECT_COLUMNS} {self._FROM} WHERE l.id = %s",
            params=[log_id],
            context_msg="PostgresDiveLogRepository: Failed to get dive log",
            extra={"log_id": str(log_id)},
        )
        return _row_to_log(row) if row else None

    def list_logs(
        self,
        *,
        owner_user_id: Optional[UUID] = None,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
        sort: SortSpec = SortSpec(),
    ) -> List[DiveLog]:
        clauses: list[sql.Composable] = []
        params: list[object] = []
        if owner_user_id is not None:
            clauses.append(sql.SQL("l.user_id = %s"))
            params.append(owner_user_id)
        if start_from is not None:
            clauses.append(sql.SQL("l.start_time >= %s"))
            params.append(start_from)
        if start_to is not None:
            clauses.append(sql.SQL("l.start_time <= %s"))
            params.append(start_to)

        where = (
            sql.SQL("WHERE ") + sql.SQL(" AND ").join(clauses)
            if clauses
            else sql.SQL("")
        )
        query = sql.SQL("SELECT {cols} {from_} {where} {order}").format(
            cols=sql.SQL(self._SELECT_COLUMNS),
            from_=sql.SQL(self._FROM),
            where=where,
            order=order_by(sort, table="l"),
        )
        rows = self._fetchall(
            query=query,
            params=params,
            context_msg="PostgresDiveLogRepository: Failed to list dive logs",
            extra={"sort_by": sort.field},
        )
        return [_row_to_log(row) for row in rows]

    def update_log(self, log_id: UUID, data: DiveLogData) -> Optional[DiveLog]:
        assignments = ", ".join(f"{c} = %s" for c in _DATA_COLUMNS)
        count = self._execute(
            query=f"""
                UPDATE dive_logs SET {assignments}, updated_at = NOW()
                WHERE id = %s
            """,
            params=[*_data_params(data), log_id],
            context_msg="PostgresDiveLogRepository: Failed to update dive log",
            extra={"log_id": str(log_id)},
        )
        if count == 0:
            return None
        return self.get_log(log_id)

    def delete_log(self, log_id: UUID) -> bool:
        count = self._execute(
            query="DELETE FROM dive_logs WHERE id = %s",
            params=[log_id],
            context_msg="PostgresDiveLogRepository: Failed to delete dive log",
            extra={"log_id": str(log_id)},
        )
        return count > 0
