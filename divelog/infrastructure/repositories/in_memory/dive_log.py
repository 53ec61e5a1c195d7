"""
In-memory DiveLogRepository.

Reads populate the owner reference (id, role level, enabled) the same way the
Postgres repository does with its LEFT JOINs.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from ....domain.entities import (
    ORPHANED_OWNER,
    DiveLog,
    DiveLogData,
    DiveLogOwnerRef,
    SortSpec,
)
from ....identity.roles import Role
from .store import DiveLogRow, InMemoryDatabase, sort_nulls_last


class InMemoryDiveLogRepository:
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def _owner_ref(self, owner_user_id: Optional[UUID]) -> DiveLogOwnerRef:
        user = self._db.users.get(owner_user_id) if owner_user_id else None
        if user is None:
            return ORPHANED_OWNER
        role_row = self._db.roles.get(user.role_id) if user.role_id else None
        return DiveLogOwnerRef(
            id=user.id,
            role=Role.for_name(role_row.record.name) if role_row else None,
            enabled=user.enabled,
        )

    def _to_log(self, row: DiveLogRow) -> DiveLog:
        return DiveLog(
            id=row.id,
            owner_user_id=row.owner_user_id,
            data=row.data,
            created_at=row.created_at,
            updated_at=row.updated_at,
            owner=self._owner_ref(row.owner_user_id),
        )

    @staticmethod
    def _sort_value(row: DiveLogRow, attribute: str):
        if attribute in ("created_at", "updated_at"):
            return getattr(row, attribute)
        return getattr(row.data, attribute)

    def create_log(self, *, owner_user_id: UUID, data: DiveLogData) -> DiveLog:
        with self._db.lock:
            now = self._db.now()
            row = DiveLogRow(
                id=uuid4(),
                owner_user_id=owner_user_id,
                data=data,
                created_at=now,
                updated_at=now,
                seq=self._db.next_seq(),
            )
            self._db.dive_logs[row.id] = row
            return self._to_log(row)

    def get_log(self, log_id: UUID) -> Optional[DiveLog]:
        with self._db.lock:
            row = self._db.dive_logs.get(log_id)
            return self._to_log(row) if row else None

    def list_logs(
        self,
        *,
        owner_user_id: Optional[UUID] = None,
        start_from: Optional[datetime] = None,
        start_to: Optional[datetime] = None,
        sort: SortSpec = SortSpec(),
    ) -> List[DiveLog]:
        def matches(row: DiveLogRow) -> bool:
            if owner_user_id is not None and row.owner_user_id != owner_user_id:
                return False
            if start_from is not None and row.data.start_time < start_from:
                return False
            if start_to is not None and row.data.start_time > start_to:
                return False
            return True

        with self._db.lock:
            rows = [r for r in self._db.dive_logs.values() if matches(r)]
            ordered = sort_nulls_last(
                rows,
                lambda r: self._sort_value(r, sort.field),
                lambda r: r.seq,
                descending=sort.descending,
            )
            return [self._to_log(r) for r in ordered]

    def update_log(self, log_id: UUID, data: DiveLogData) -> Optional[DiveLog]:
        with self._db.lock:
            row = self._db.dive_logs.get(log_id)
            if row is None:
                return None
            row.data = data
            row.updated_at = self._db.now()
            return self._to_log(row)

    def delete_log(self, log_id: UUID) -> bool:
        with self._db.lock:
            return self._db.dive_logs.pop(log_id, None) is not None
