"""
In-memory RoleRepository.

Deleting a role nulls the role reference of its users (same as the
ON DELETE SET NULL foreign key in Postgres).
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional
from uuid import UUID, uuid4

from ....identity.users import RoleRecord
from .store import InMemoryDatabase, RoleRow


class InMemoryRoleRepository:
    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db

    def get_role(self, role_id: UUID) -> Optional[RoleRecord]:
        with self._db.lock:
            row = self._db.roles.get(role_id)
            return row.record if row else None

    def get_role_by_name(self, name: str) -> Optional[RoleRecord]:
        with self._db.lock:
            for row in self._db.roles.values():
                if row.record.name == name:
                    return row.record
        return None

    def list_roles(self) -> List[RoleRecord]:
        with self._db.lock:
            rows = sorted(
                self._db.roles.values(),
                key=lambda r: (r.record.created_at, r.seq),
                reverse=True,
            )
            return [r.record for r in rows]

    def create_role(self, *, name: str, description: str) -> RoleRecord:
        with self._db.lock:
            if self.get_role_by_name(name) is not None:
                raise ValueError(f"role name already exists: {name}")
            now = self._db.now()
            record = RoleRecord(
                id=uuid4(),
                name=name,
                description=description,
                created_at=now,
                updated_at=now,
            )
            self._db.roles[record.id] = RoleRow(record=record, seq=self._db.next_seq())
            return record

    def update_role_description(
        self, role_id: UUID, description: str
    ) -> Optional[RoleRecord]:
        with self._db.lock:
            row = self._db.roles.get(role_id)
            if row is None:
                return None
            row.record = replace(
                row.record, description=description, updated_at=self._db.now()
            )
            return row.record

    def delete_role(self, role_id: UUID) -> bool:
        with self._db.lock:
            if self._db.roles.pop(role_id, None) is None:
                return False
            for user in self._db.users.values():
                if user.role_id == role_id:
                    user.role_id = None
            return True
