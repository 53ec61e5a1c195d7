"""
Shared plumbing for the PostgreSQL repositories: pool access and query
helpers that log and wrap every failure in DatabaseError.
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg import sql
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import SortSpec


class PostgresRepository:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Injectable pool for tests; production uses the global pool.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchall(
        self, *, query, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _fetchone(
        self, *, query, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc

    def _execute(
        self, *, query, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """Run a statement and return the affected row count."""
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).rowcount
        except Exception as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise DatabaseError(f"{context_msg}: {exc}") from exc


def order_by(sort: SortSpec, *, table: str) -> sql.Composed:
    """
    ORDER BY clause for a whitelisted attribute (column names match the
    entity attribute names). Ties fall back to creation order.
    """
    direction = sql.SQL("DESC") if sort.descending else sql.SQL("ASC")
    return sql.SQL("ORDER BY {col} {dir} NULLS LAST, {created} {dir}, {id} {dir}").format(
        col=sql.Identifier(table, sort.field),
        dir=direction,
        created=sql.Identifier(table, "created_at"),
        id=sql.Identifier(table, "id"),
    )
