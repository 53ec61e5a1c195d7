"""
Repository implementations.

- in_memory: tests and local development (no DATABASE_URL)
- postgres: production persistence (psycopg pool)
"""

from .in_memory import (
    InMemoryDatabase,
    InMemoryDiveLogRepository,
    InMemoryRoleRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresDiveLogRepository,
    PostgresRoleRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryDatabase",
    "InMemoryDiveLogRepository",
    "InMemoryRoleRepository",
    "InMemoryUserRepository",
    "PostgresDiveLogRepository",
    "PostgresRoleRepository",
    "PostgresUserRepository",
]
