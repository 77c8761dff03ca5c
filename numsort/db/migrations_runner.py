"""Lightweight SQL migrations runner.

Applies .sql files in lexical order from the packaged `migrations/` directory.
Skips rollback files and records applied filenames in a `schema_migrations`
table so the same migration is never applied twice. Each file runs in its own
transaction together with its journal row.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

DEFAULT_MIGRATIONS_DIR = Path(__file__).with_name("migrations")

_JOURNAL_DDL = (
    "CREATE TABLE IF NOT EXISTS schema_migrations ("
    "filename VARCHAR(255) PRIMARY KEY, "
    "applied_at VARCHAR(32) NOT NULL)"
)


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        # Skip rollback scripts in forward runs
        if "rollback" in p.name.lower():
            continue
        yield p


def _split_statements(sql: str) -> List[str]:
    """Split a script into statements, dropping comments and transaction verbs.

    Both SQLite's DB-API and SQLAlchemy's text() expect one statement per
    execute() call; each file already runs inside a transaction.
    """
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    statements = []
    for stmt in "\n".join(lines).split(";"):
        s = stmt.strip()
        if not s or s.upper() in {"BEGIN", "COMMIT", "END"}:
            continue
        statements.append(s)
    return statements


def applied_migrations(conn: Connection) -> set[str]:
    conn.execute(sql_text(_JOURNAL_DDL))
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).all()
    return {str(r[0]) for r in rows}


def apply_migrations(
    engine: Engine, migrations_dir: str | os.PathLike[str] | None = None
) -> List[str]:
    """Apply pending migrations and return the filenames applied by this call."""
    root = Path(migrations_dir) if migrations_dir is not None else DEFAULT_MIGRATIONS_DIR
    if not root.exists():
        logger.warning("migrations_dir_missing path=%s", root)
        return []

    with engine.begin() as conn:
        applied = applied_migrations(conn)

    newly_applied: List[str] = []
    for sql_path in _iter_sql_files(root):
        fname = sql_path.name
        if fname in applied:
            continue
        statements = _split_statements(sql_path.read_text(encoding="utf-8"))
        if not statements:
            continue
        try:
            with engine.begin() as conn:
                for stmt in statements:
                    conn.exec_driver_sql(stmt)
                conn.execute(
                    sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :at)"),
                    {
                        "f": fname,
                        # ISO-8601 UTC without fractional seconds (e.g., 2024-01-01T00:00:00Z)
                        "at": datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z"),
                    },
                )
        except IntegrityError:
            # Another instance recorded the same file first
            with engine.begin() as conn:
                if fname not in applied_migrations(conn):
                    raise
            logger.info("migration_already_applied file=%s", fname)
            continue
        logger.info("migration_applied file=%s statements=%d", fname, len(statements))
        newly_applied.append(fname)
    return newly_applied


__all__ = ["apply_migrations", "applied_migrations", "DEFAULT_MIGRATIONS_DIR"]
