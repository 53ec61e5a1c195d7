"""Typed pool errors (instead of bare RuntimeError)."""


class DatabasePoolError(Exception):
    """Base for connection pool errors."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """init_pool() called twice."""


class PoolNotInitializedError(DatabasePoolError):
    """Pool used before init_pool()."""
