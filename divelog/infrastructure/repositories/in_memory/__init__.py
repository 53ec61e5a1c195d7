"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .dive_log import InMemoryDiveLogRepository
from .role import InMemoryRoleRepository
from .store import InMemoryDatabase
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryDiveLogRepository",
    "InMemoryRoleRepository",
    "InMemoryUserRepository",
]
