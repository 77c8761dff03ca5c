"""Functional test bootstrap.

Functional tests run against a file-backed SQLite database created once per
session in a pytest temp directory, with the packaged migrations applied.
Each SQL-backed test starts from an empty `nums` table. Tests that do not
need a database use the in-memory store or a mocked store instead.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest
from sqlalchemy import text
from sqlalchemy.engine import Engine

from numsort.config import AppConfig, DatabaseConfig, HttpServerConfig
from numsort.db.base import dispose_engine, get_engine
from numsort.db.migrations_runner import apply_migrations
from numsort.logic.inmemory_state import InMemoryNumberStore
from numsort.logic.ordering import OrderingService


@pytest.fixture(scope="session")
def sqlite_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    db_file = tmp_path_factory.mktemp("db") / "functional_tests.db"
    return f"sqlite+pysqlite:///{db_file}"


@pytest.fixture
def sql_engine(sqlite_url: str) -> Iterator[Engine]:
    """Migrated engine over the shared SQLite file with an empty nums table."""
    engine = get_engine(sqlite_url)
    apply_migrations(engine)
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM nums"))
    yield engine
    dispose_engine()


@pytest.fixture
def app_config(sqlite_url: str) -> AppConfig:
    return AppConfig(
        env="local",
        http_server=HttpServerConfig(address="localhost:8081", timeout=2.0, idle_timeout=30.0),
        database=DatabaseConfig(dsn=sqlite_url, auto_migrate=True),
    )


@pytest.fixture
def memory_store() -> InMemoryNumberStore:
    return InMemoryNumberStore()


@pytest.fixture
def ordering_logger() -> logging.Logger:
    return logging.getLogger("tests.ordering")


@pytest.fixture
def memory_service(memory_store: InMemoryNumberStore, ordering_logger: logging.Logger) -> OrderingService:
    return OrderingService(memory_store, ordering_logger)
