"""Database bootstrap utilities.

Convenience imports for engine construction and the SQL migrations runner
that creates the `nums` table from the packaged migrations/ directory.
"""

from numsort.db.base import dispose_engine, get_engine
from numsort.db.migrations_runner import apply_migrations

__all__ = [
    "get_engine",
    "dispose_engine",
    "apply_migrations",
]
