"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (in-memory store, cheap password hashing)
  - Reset repositories and the login limiter between tests
  - Provide factories for users per role, dive logs and auth headers

Collaborators:
  - pytest: Test framework
  - divelog.container: repository singletons
  - fastapi.testclient.TestClient: HTTP tests against the real app

Notes:
  - Environment is set before any divelog import so Settings picks it up
  - Every test starts from an empty store with the built-in roles seeded
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = ""
os.environ["PASSWORD_HASH_TIME_COST"] = "1"
os.environ["PASSWORD_HASH_MEMORY_COST"] = "1024"

from divelog.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from fastapi.testclient import TestClient  # noqa: E402

from divelog.application.usecases import ensure_user, seed_builtin_roles  # noqa: E402
from divelog.container import (  # noqa: E402
    get_dive_log_repository,
    get_in_memory_database,
    get_role_repository,
    get_user_repository,
    reset_repositories,
)
from divelog.crosscutting.rate_limit import reset_login_rate_limiter  # noqa: E402
from divelog.domain.access_policy import Principal  # noqa: E402
from divelog.domain.entities import DiveLog, DiveLogData, TankMaterial  # noqa: E402
from divelog.identity.credentials import (  # noqa: E402
    create_access_token,
    hash_password,
)
from divelog.identity.roles import Role  # noqa: E402
from divelog.identity.users import User  # noqa: E402

DEFAULT_PASSWORD = "correct-horse-battery"
BASE_TIME = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def _isolated_state():
    """R: Fresh settings, store and limiter for every test."""
    app_config.get_settings.cache_clear()
    reset_repositories()
    reset_login_rate_limiter()
    seed_builtin_roles(get_role_repository())
    yield
    reset_repositories()
    reset_login_rate_limiter()


# ============================================================================
# Repositories
# ============================================================================


@pytest.fixture
def db():
    return get_in_memory_database()


@pytest.fixture
def user_repo():
    return get_user_repository()


@pytest.fixture
def role_repo():
    return get_role_repository()


@pytest.fixture
def log_repo():
    return get_dive_log_repository()


# ============================================================================
# Factories
# ============================================================================


class UserFactory:
    """R: Creates accounts through the bootstrap path (hashing included)."""

    def __init__(self) -> None:
        self._counter = 0

    def create(
        self,
        role: Role = Role.BASIC_USER,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        password: str = DEFAULT_PASSWORD,
        enabled: bool = True,
    ) -> User:
        self._counter += 1
        email = email or f"{role.value}{self._counter}@example.com"
        user = ensure_user(
            get_user_repository(),
            get_role_repository(),
            email=email,
            password=password,
            full_name=full_name or f"{role.value} {self._counter}",
            role=role,
        ).user
        if not enabled:
            user = get_user_repository().update_user(user.id, enabled=False)
        return user

    def with_custom_role(self, role_name: str = "instructor") -> User:
        roles = get_role_repository()
        record = roles.get_role_by_name(role_name) or roles.create_role(
            name=role_name, description=f"{role_name} role"
        )
        self._counter += 1
        return get_user_repository().create_user(
            email=f"{role_name}{self._counter}@example.com",
            full_name=f"{role_name} {self._counter}",
            password_hash=hash_password(DEFAULT_PASSWORD),
            role_id=record.id,
        )


@pytest.fixture
def users() -> UserFactory:
    return UserFactory()


def make_log_data(**overrides) -> DiveLogData:
    values = dict(
        start_time=BASE_TIME,
        end_time=BASE_TIME + timedelta(minutes=45),
        max_depth=18.5,
        location="Blue Hole",
        avg_depth=12.0,
        tank_material=TankMaterial.ALUMINIUM,
    )
    values.update(overrides)
    return DiveLogData(**values)


@pytest.fixture
def make_log():
    def _make(owner: Optional[User], **overrides) -> DiveLog:
        return get_dive_log_repository().create_log(
            owner_user_id=owner.id if owner else None,
            data=make_log_data(**overrides),
        )

    return _make


def principal_of(user: User) -> Principal:
    return Principal(id=user.id, role=user.role_level, enabled=user.enabled)


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


# ============================================================================
# HTTP
# ============================================================================


@pytest.fixture
def client() -> TestClient:
    from divelog.api.main import create_app

    return TestClient(create_app(), raise_server_exceptions=False)


@pytest.fixture
def auth():
    """R: auth(user) -> Authorization header for that user."""
    return auth_headers


@pytest.fixture
def principal():
    return principal_of


@pytest.fixture
def log_data():
    return make_log_data
