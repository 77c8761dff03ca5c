"""SQLAlchemy engine construction.

The service targets PostgreSQL in production but supports SQLite for local
development and CI. No declarative models are defined here; this module only
manages connection lifecycle.
"""

from __future__ import annotations

import logging
import math
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _db_url() -> str:
    # Fallback for callers that do not pass a DSN from AppConfig
    return os.getenv("DATABASE_URL") or "sqlite+pysqlite:///:memory:"


def _normalize_url(url: str) -> str:
    # Accept libpq-style URLs (postgres://, postgresql://) and pin the psycopg2 driver
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[len("postgres://"):]
    if url.startswith("postgresql://"):
        return "postgresql+psycopg2://" + url[len("postgresql://"):]
    return url


# Module-level cached Engine to ensure a single shared pool
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str | None = None, *, connect_timeout: float | None = None) -> Engine:
    """Return a singleton SQLAlchemy Engine for the given URL.

    Reuses a module-level Engine so every store instance shares one pool.
    For SQLite in-memory URLs, use a StaticPool to keep a single connection
    alive across sessions and threads during tests. For PostgreSQL,
    `connect_timeout` bounds both the libpq connect and the wait for a pooled
    connection, so an unreachable server fails within the request budget.
    """
    global _ENGINE, _ENGINE_URL
    resolved_url = _normalize_url(url or _db_url())

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        if _ENGINE is not None:
            _ENGINE.dispose()
        kwargs: dict = {"pool_pre_ping": True}
        if resolved_url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in resolved_url:
                # Keep a single in-memory DB connection shared across the process
                kwargs["poolclass"] = StaticPool
        elif resolved_url.startswith("postgresql") and connect_timeout is not None:
            # libpq takes whole seconds
            kwargs["connect_args"] = {"connect_timeout": max(1, math.ceil(connect_timeout))}
            kwargs["pool_timeout"] = connect_timeout
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        logger.info("db.engine.created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


def dispose_engine() -> None:
    """Close pooled connections and forget the cached Engine."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
        logger.info("db.engine.disposed")
    _ENGINE = None
    _ENGINE_URL = None
