"""
Name: PostgreSQL Repository Unit Tests

Responsibilities:
  - Map joined rows to User / RoleRecord / DiveLog (owner reference included)
  - Translate row counts to None / False results
  - Wrap driver failures in DatabaseError

Constraints:
  - No real database: the pool is a Mock whose connection() yields a fake conn
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from divelog.crosscutting.exceptions import DatabaseError
from divelog.domain.entities import TankMaterial
from divelog.identity.roles import Role
from divelog.infrastructure.repositories import (
    PostgresDiveLogRepository,
    PostgresRoleRepository,
    PostgresUserRepository,
)

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _pool(*, fetchone=None, fetchall=None, rowcount=1, error=None):
    conn = MagicMock()
    if error is not None:
        conn.execute.side_effect = error
    else:
        cursor = conn.execute.return_value
        cursor.fetchone.return_value = fetchone
        cursor.fetchall.return_value = fetchall or []
        cursor.rowcount = rowcount
    pool = MagicMock()
    pool.connection.return_value.__enter__.return_value = conn
    pool.connection.return_value.__exit__.return_value = False
    return pool, conn


def _role_row(name="admin"):
    return (uuid4(), name, "desc", NOW, NOW)


def _user_row(role_row=None, enabled=True):
    user = (uuid4(), "diver@example.com", "Diver", "hash", enabled, NOW, NOW)
    if role_row is None:
        return user + (None, None, None, None, None, None)
    return user + (role_row[0],) + role_row


def _log_row(owner_id=None, owner_enabled=None, role_name=None, tank="Steel"):
    data = (
        NOW,  # start_time
        NOW,  # end_time
        20.0,  # max_depth
        "Reef",  # location
        None, None, None,
        tank,
        None, None, None, None, None, None,
    )
    return (uuid4(), owner_id, NOW, NOW) + data + (owner_id, owner_enabled, role_name)


class TestPostgresUserRepository:
    def test_get_user_maps_role(self):
        role = _role_row("super_admin")
        pool, _ = _pool(fetchone=_user_row(role))
        user = PostgresUserRepository(pool=pool).get_user(uuid4())
        assert user.email == "diver@example.com"
        assert user.role.name == "super_admin"
        assert user.role_level == Role.SUPER_ADMIN

    def test_get_user_without_role(self):
        pool, _ = _pool(fetchone=_user_row())
        user = PostgresUserRepository(pool=pool).get_user(uuid4())
        assert user.role is None

    def test_get_user_missing(self):
        pool, _ = _pool(fetchone=None)
        assert PostgresUserRepository(pool=pool).get_user(uuid4()) is None

    def test_email_lookup_is_normalized(self):
        pool, conn = _pool(fetchone=None)
        PostgresUserRepository(pool=pool).get_user_by_email("  A@B.COM ")
        _, params = conn.execute.call_args.args
        assert params == ("a@b.com",)

    def test_update_missing_user_returns_none(self):
        pool, _ = _pool(rowcount=0)
        assert PostgresUserRepository(pool=pool).update_user(uuid4(), full_name="x") is None

    def test_delete_reports_rowcount(self):
        pool, _ = _pool(rowcount=0)
        assert PostgresUserRepository(pool=pool).delete_user(uuid4()) is False

    def test_list_maps_rows(self):
        pool, _ = _pool(fetchall=[_user_row(_role_row("basic_user"))] * 2)
        assert len(PostgresUserRepository(pool=pool).list_users(enabled_only=True)) == 2

    def test_driver_error_wrapped(self):
        pool, _ = _pool(error=RuntimeError("connection reset"))
        with pytest.raises(DatabaseError) as exc_info:
            PostgresUserRepository(pool=pool).get_user(uuid4())
        assert "Failed to get user" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_ping(self):
        pool, _ = _pool(fetchone=(1,))
        assert PostgresUserRepository(pool=pool).ping() is True


class TestPostgresRoleRepository:
    def test_create_returns_record(self):
        row = _role_row("instructor")
        pool, conn = _pool(fetchone=row)
        role = PostgresRoleRepository(pool=pool).create_role(
            name="instructor", description="desc"
        )
        assert role.id == row[0]
        assert role.level == Role.BASIC_USER
        _, params = conn.execute.call_args.args
        assert params[1:] == ("instructor", "desc")

    def test_list_roles(self):
        pool, _ = _pool(fetchall=[_role_row("admin"), _role_row("basic_user")])
        names = [r.name for r in PostgresRoleRepository(pool=pool).list_roles()]
        assert names == ["admin", "basic_user"]

    def test_delete_missing(self):
        pool, _ = _pool(rowcount=0)
        assert PostgresRoleRepository(pool=pool).delete_role(uuid4()) is False


class TestPostgresDiveLogRepository:
    def test_owner_reference(self):
        owner_id = uuid4()
        pool, _ = _pool(fetchone=_log_row(owner_id, False, "admin"))
        log = PostgresDiveLogRepository(pool=pool).get_log(uuid4())
        assert log.owner_user_id == owner_id
        assert log.owner.role == Role.ADMIN
        assert log.owner.enabled is False
        assert log.data.tank_material == TankMaterial.STEEL

    def test_orphaned_log(self):
        pool, _ = _pool(fetchone=_log_row(tank=None))
        log = PostgresDiveLogRepository(pool=pool).get_log(uuid4())
        assert log.owner.is_orphaned
        assert log.data.tank_material is None

    def test_owner_with_deleted_role_is_orphaned(self):
        pool, _ = _pool(fetchone=_log_row(uuid4(), True, None))
        log = PostgresDiveLogRepository(pool=pool).get_log(uuid4())
        assert log.owner.is_orphaned

    def test_list_passes_filters_as_params(self):
        owner_id = uuid4()
        pool, conn = _pool(fetchall=[])
        PostgresDiveLogRepository(pool=pool).list_logs(
            owner_user_id=owner_id, start_from=NOW, start_to=NOW
        )
        _, params = conn.execute.call_args.args
        assert params == (owner_id, NOW, NOW)

    def test_update_missing(self, log_data):
        pool, _ = _pool(rowcount=0)
        assert PostgresDiveLogRepository(pool=pool).update_log(uuid4(), log_data()) is None

    def test_update_sends_enum_value(self, log_data):
        pool, conn = _pool(rowcount=0)
        PostgresDiveLogRepository(pool=pool).update_log(uuid4(), log_data())
        _, params = conn.execute.call_args.args
        assert "Aluminium" in params
