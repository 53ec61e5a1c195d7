"""
============================================================
CRC CARD: infrastructure/repositories/in_memory/store.py
============================================================
Class: InMemoryDatabase

Responsibilities:
  - Hold the in-memory "tables" (roles, users, dive_logs) shared by the
    in-memory repositories, so references behave like foreign keys:
      - deleting a user nulls dive_logs.owner_user_id
      - deleting a role nulls users.role_id
  - Provide one lock for every read/write.
  - Provide deterministic, nulls-last ordering aligned with Postgres.

Collaborators:
  - in_memory.user / role / dive_log repositories

Constraints / Notes:
  - For tests and local development only. Data is lost on restart.
============================================================
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional, TypeVar
from uuid import UUID

from ....domain.entities import DiveLogData
from ....identity.users import RoleRecord

T = TypeVar("T")


@dataclass
class UserRow:
    id: UUID
    email: str
    full_name: str
    password_hash: str
    role_id: Optional[UUID]
    enabled: bool
    created_at: datetime
    updated_at: datetime
    seq: int


@dataclass
class DiveLogRow:
    id: UUID
    owner_user_id: Optional[UUID]
    data: DiveLogData
    created_at: datetime
    updated_at: datetime
    seq: int


@dataclass
class RoleRow:
    record: RoleRecord
    seq: int


class InMemoryDatabase:
    def __init__(self) -> None:
        self.lock = RLock()
        self.roles: Dict[UUID, RoleRow] = {}
        self.users: Dict[UUID, UserRow] = {}
        self.dive_logs: Dict[UUID, DiveLogRow] = {}
        self._seq = itertools.count()

    @staticmethod
    def now() -> datetime:
        return datetime.now(timezone.utc)

    def next_seq(self) -> int:
        """R: Insertion order, used to break ties between equal sort values."""
        return next(self._seq)

    def clear(self) -> None:
        with self.lock:
            self.roles.clear()
            self.users.clear()
            self.dive_logs.clear()


def sort_nulls_last(
    items: Iterable[T],
    value: Callable[[T], object],
    seq: Callable[[T], int],
    *,
    descending: bool,
) -> List[T]:
    """
    Order by value (ties by insertion order, same direction); rows whose value
    is None go last in both directions.
    """
    rows = list(items)
    present = [i for i in rows if value(i) is not None]
    missing = [i for i in rows if value(i) is None]
    present.sort(key=lambda i: (value(i), seq(i)), reverse=descending)
    missing.sort(key=seq, reverse=descending)
    return present + missing
