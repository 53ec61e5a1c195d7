"""PostgreSQL repository implementations (psycopg + psycopg_pool)."""

from .dive_log import PostgresDiveLogRepository
from .role import PostgresRoleRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresDiveLogRepository",
    "PostgresRoleRepository",
    "PostgresUserRepository",
]
