"""Number data access helpers.

SQL-backed implementation of the number store over the `nums` table. Keeps
inline SQL out of the service and route layers. Driver failures are raised as
`StoreError`; statements cancelled by the caller's time boundary are raised as
`StoreTimeoutError`.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from numsort.logic.errors import StoreError, StoreTimeoutError, raise_if_expired

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for a statement cancelled by statement_timeout
_PG_QUERY_CANCELED = "57014"
# SQLite's own default busy wait, restored when no timeout is given
_SQLITE_DEFAULT_BUSY_MS = 5000


def _timeout_ms(timeout: float) -> int:
    return max(1, int(timeout * 1000))


def _is_timeout(exc: SQLAlchemyError) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == _PG_QUERY_CANCELED:
        return True
    return "database is locked" in str(orig or exc).lower()


def _store_error(operation: str, exc: Exception) -> StoreError:
    if isinstance(exc, SQLAlchemyError) and _is_timeout(exc):
        return StoreTimeoutError(f"{operation}: timed out: {exc}")
    return StoreError(f"{operation}: {exc}")


class SqlNumberStore:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _apply_timeout(self, conn: Connection, timeout: Optional[float]) -> None:
        dialect = (conn.dialect.name or "").lower()
        if dialect == "postgresql":
            if timeout is None:
                return
            # is_local=true scopes the setting to the current transaction
            conn.execute(
                sql_text("SELECT set_config('statement_timeout', :ms, true)"),
                {"ms": str(_timeout_ms(timeout))},
            )
        elif dialect == "sqlite":
            busy_ms = _SQLITE_DEFAULT_BUSY_MS if timeout is None else _timeout_ms(timeout)
            conn.exec_driver_sql(f"PRAGMA busy_timeout = {int(busy_ms)}")

    def append(self, value: int, *, timeout: Optional[float] = None) -> None:
        op = "storage.append"
        raise_if_expired(timeout, op)
        try:
            with self._engine.begin() as conn:
                self._apply_timeout(conn, timeout)
                conn.execute(sql_text("INSERT INTO nums (num) VALUES (:num)"), {"num": value})
        except (SQLAlchemyError, OverflowError) as exc:
            raise _store_error(op, exc) from exc

    def scan_all(self, *, timeout: Optional[float] = None) -> List[int]:
        op = "storage.scan_all"
        raise_if_expired(timeout, op)
        try:
            with self._engine.begin() as conn:
                self._apply_timeout(conn, timeout)
                rows = conn.execute(sql_text("SELECT num FROM nums")).all()
        except SQLAlchemyError as exc:
            raise _store_error(op, exc) from exc

        numbers: List[int] = []
        for row in rows:
            num = row[0]
            # bool is an int subclass; a stored boolean is still malformed
            if not isinstance(num, int) or isinstance(num, bool):
                raise StoreError(f"{op}: malformed stored value {num!r}")
            numbers.append(num)
        return numbers

    def ping(self, *, timeout: Optional[float] = None) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self._engine.begin() as conn:
                self._apply_timeout(conn, timeout)
                conn.execute(sql_text("SELECT 1")).scalar()
            return True
        except SQLAlchemyError:
            logger.error("storage.ping failed", exc_info=True)
            return False


__all__ = ["SqlNumberStore"]
