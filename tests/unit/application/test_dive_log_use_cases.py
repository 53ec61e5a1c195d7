"""
Name: Dive Log Use Case Tests

Responsibilities:
  - Payload validation (mandatory fields, tank material)
  - Delegated creation through addUser
  - Role-scoped listings with time bounds, sorting and limits
  - Single-log access for read, update and delete
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from divelog.application.usecases import (
    CreateDiveLogUseCase,
    DeleteDiveLogUseCase,
    DiveLogInput,
    GetDiveLogUseCase,
    ListDiveLogsUseCase,
    ListingQuery,
    ServiceErrorCode,
    UpdateDiveLogUseCase,
)
from divelog.domain.entities import TankMaterial
from divelog.identity.roles import Role

pytestmark = pytest.mark.unit

START = datetime(2024, 7, 1, 8, 30, tzinfo=timezone.utc)


def _payload(**overrides) -> DiveLogInput:
    values = dict(
        start_time=START,
        end_time=START + timedelta(minutes=50),
        max_depth=22.0,
        location="Shark Point",
        tank_material="Steel",
    )
    values.update(overrides)
    return DiveLogInput(**values)


class TestCreateDiveLog:
    @pytest.fixture
    def use_case(self, log_repo, user_repo):
        return CreateDiveLogUseCase(log_repo, user_repo)

    def test_creates_for_self(self, use_case, users, principal):
        diver = users.create()
        result = use_case.execute(principal(diver), _payload(location="  Shark Point "))

        assert result.error is None
        assert result.log.owner_user_id == diver.id
        assert result.log.data.location == "Shark Point"
        assert result.log.data.tank_material == TankMaterial.STEEL

    @pytest.mark.parametrize("missing", ["start_time", "end_time", "max_depth", "location"])
    def test_mandatory_fields(self, use_case, users, principal, missing):
        result = use_case.execute(principal(users.create()), _payload(**{missing: None}))
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR
        assert result.error.message == (
            "The fields startTime, endTime, maxDepth and location are mandatory!"
        )

    def test_invalid_tank_material(self, use_case, users, principal):
        result = use_case.execute(principal(users.create()), _payload(tank_material="Carbon"))
        assert result.error.message == (
            "Please enter a valid tank material from the list: Aluminium, Steel"
        )

    def test_naive_times_taken_as_utc(self, use_case, users, principal):
        result = use_case.execute(
            principal(users.create()),
            _payload(start_time=datetime(2024, 7, 1, 8, 30), end_time=datetime(2024, 7, 1, 9)),
        )
        assert result.log.data.start_time == START

    def test_basic_user_add_user_ignored(self, use_case, users, principal):
        diver = users.create()
        other = users.create()
        result = use_case.execute(principal(diver), _payload(), add_user_id=str(other.id))
        assert result.log.owner_user_id == diver.id

    def test_admin_creates_for_basic_user(self, use_case, users, principal):
        target = users.create()
        result = use_case.execute(
            principal(users.create(Role.ADMIN)), _payload(), add_user_id=str(target.id)
        )
        assert result.log.owner_user_id == target.id

    def test_admin_for_super_admin_denied(self, use_case, users, principal):
        result = use_case.execute(
            principal(users.create(Role.ADMIN)),
            _payload(),
            add_user_id=str(users.create(Role.SUPER_ADMIN).id),
        )
        assert result.error.code == ServiceErrorCode.FORBIDDEN
        assert result.error.message == (
            "You are not allowed to create a log for this user."
        )

    def test_super_admin_for_super_admin(self, use_case, users, principal):
        target = users.create(Role.SUPER_ADMIN)
        result = use_case.execute(
            principal(users.create(Role.SUPER_ADMIN)), _payload(), add_user_id=target.id
        )
        assert result.log.owner_user_id == target.id

    def test_unknown_add_user(self, use_case, users, principal):
        missing = str(uuid4())
        result = use_case.execute(
            principal(users.create(Role.ADMIN)), _payload(), add_user_id=missing
        )
        assert result.error.code == ServiceErrorCode.NOT_FOUND
        assert result.error.message == f'User with id "{missing}" not found!'


class TestListDiveLogs:
    @pytest.fixture
    def use_case(self, log_repo):
        return ListDiveLogsUseCase(log_repo)

    @pytest.fixture
    def scene(self, users, make_log, user_repo):
        basic = users.create()
        disabled = users.create()
        admin = users.create(Role.ADMIN)
        super_admin = users.create(Role.SUPER_ADMIN)
        gone = users.create()

        logs = {
            "basic": make_log(basic, max_depth=10.0),
            "disabled": make_log(disabled, max_depth=30.0),
            "admin": make_log(admin, max_depth=15.0),
            "super": make_log(super_admin, max_depth=40.0),
            "orphan": make_log(gone, max_depth=5.0),
        }
        user_repo.update_user(disabled.id, enabled=False)
        user_repo.delete_user(gone.id)
        return {"basic": basic, "admin": admin, "super": super_admin, "logs": logs}

    @staticmethod
    def _ids(result):
        return {log.id for log in result.logs}

    def test_basic_user_sees_own_logs_only(self, use_case, scene, principal):
        result = use_case.execute(principal(scene["basic"]), ListingQuery())
        assert self._ids(result) == {scene["logs"]["basic"].id}

    def test_admin_active_only(self, use_case, scene, principal):
        result = use_case.execute(principal(scene["admin"]), ListingQuery())
        assert self._ids(result) == {
            scene["logs"]["basic"].id,
            scene["logs"]["admin"].id,
        }

    def test_admin_including_inactive(self, use_case, scene, principal):
        result = use_case.execute(
            principal(scene["admin"]), ListingQuery(active_users_only="false")
        )
        logs = scene["logs"]
        assert self._ids(result) == {
            logs["basic"].id,
            logs["disabled"].id,
            logs["admin"].id,
            logs["orphan"].id,
        }

    def test_super_admin_sees_all(self, use_case, scene, principal):
        result = use_case.execute(
            principal(scene["super"]), ListingQuery(active_users_only="false")
        )
        assert self._ids(result) == {log.id for log in scene["logs"].values()}

    def test_sort_and_limit(self, use_case, scene, principal):
        result = use_case.execute(
            principal(scene["super"]),
            ListingQuery(
                active_users_only="false",
                sort_by="maxDepth",
                sort_order="desc",
                max_amount="2",
            ),
        )
        assert [log.data.max_depth for log in result.logs] == [40.0, 30.0]

    def test_missing_values_sort_last(self, use_case, users, make_log, principal):
        diver = users.create()
        make_log(diver, water_temperature=None)
        warm = make_log(diver, water_temperature=28.0)
        cold = make_log(diver, water_temperature=18.0)

        for order, expected_first in (("asc", cold), ("desc", warm)):
            result = use_case.execute(
                principal(diver),
                ListingQuery(sort_by="waterTemperature", sort_order=order),
            )
            assert result.logs[0].id == expected_first.id
            assert result.logs[-1].data.water_temperature is None

    def test_time_bounds_inclusive(self, use_case, users, make_log, principal, log_data):
        diver = users.create()
        base = log_data().start_time
        early = make_log(diver, start_time=base - timedelta(days=1))
        on_time = make_log(diver, start_time=base)
        make_log(diver, start_time=base + timedelta(days=1))

        result = use_case.execute(
            principal(diver),
            ListingQuery(ts_start=(base - timedelta(days=1)).isoformat(), ts_end=base.isoformat()),
        )
        assert self._ids(result) == {early.id, on_time.id}

    def test_invalid_bound(self, use_case, scene, principal):
        result = use_case.execute(principal(scene["basic"]), ListingQuery(ts_end="soon"))
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR


class TestSingleLogAccess:
    @pytest.fixture
    def get_case(self, log_repo):
        return GetDiveLogUseCase(log_repo)

    @pytest.fixture
    def update_case(self, log_repo):
        return UpdateDiveLogUseCase(log_repo)

    @pytest.fixture
    def delete_case(self, log_repo):
        return DeleteDiveLogUseCase(log_repo)

    def test_owner_reads(self, get_case, users, make_log, principal):
        diver = users.create()
        log = make_log(diver)
        assert get_case.execute(principal(diver), str(log.id)).log.id == log.id

    def test_basic_user_foreign_log_denied(self, get_case, users, make_log, principal):
        log = make_log(users.create())
        result = get_case.execute(principal(users.create()), log.id)
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    def test_admin_reads_orphaned_log(self, get_case, users, make_log, principal):
        log = make_log(None)
        assert get_case.execute(principal(users.create(Role.ADMIN)), log.id).log

    def test_admin_cannot_read_admin_log(self, get_case, users, make_log, principal):
        log = make_log(users.create(Role.ADMIN))
        result = get_case.execute(principal(users.create(Role.ADMIN)), log.id)
        assert result.error.code == ServiceErrorCode.FORBIDDEN

    @pytest.mark.parametrize("log_id", ["bogus", str(uuid4())])
    def test_not_found(self, get_case, users, principal, log_id):
        result = get_case.execute(principal(users.create()), log_id)
        assert result.error.message == f'Dive log with id "{log_id}" not found!'

    def test_update_replaces_payload_keeps_owner(self, update_case, users, make_log, principal):
        diver = users.create()
        log = make_log(diver, water_body="Sea", visibility=20.0)
        result = update_case.execute(
            principal(users.create(Role.ADMIN)), log.id, _payload(location="Reef")
        )
        assert result.log.owner_user_id == diver.id
        assert result.log.data.location == "Reef"
        assert result.log.data.water_body is None
        assert result.log.data.visibility is None

    def test_update_validates_before_lookup(self, update_case, users, principal):
        result = update_case.execute(principal(users.create()), uuid4(), _payload(location=""))
        assert result.error.code == ServiceErrorCode.VALIDATION_ERROR

    def test_delete(self, delete_case, users, make_log, principal, log_repo):
        diver = users.create()
        log = make_log(diver)
        result = delete_case.execute(principal(diver), log.id)
        assert result.message == f'Dive log with id "{log.id}" deleted!'
        assert log_repo.get_log(log.id) is None

    def test_delete_denied(self, delete_case, users, make_log, principal, log_repo):
        log = make_log(users.create(Role.SUPER_ADMIN))
        result = delete_case.execute(principal(users.create(Role.ADMIN)), log.id)
        assert result.error.code == ServiceErrorCode.FORBIDDEN
        assert log_repo.get_log(log.id) is not None
