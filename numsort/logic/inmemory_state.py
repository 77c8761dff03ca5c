"""In-memory number store (test/dev only).

Keeps the collection in a process-local list guarded by a lock. Nothing
survives a restart, so this is only for local runs and tests that do not
need a database.
"""

from __future__ import annotations

import threading
from typing import List, Optional

from numsort.logic.errors import StoreTimeoutError, raise_if_expired


class InMemoryNumberStore:
    def __init__(self, initial: Optional[List[int]] = None) -> None:
        self._numbers: List[int] = list(initial or [])
        self._lock = threading.Lock()

    def _acquire(self, timeout: Optional[float], operation: str) -> None:
        raise_if_expired(timeout, operation)
        acquired = self._lock.acquire(timeout=-1 if timeout is None else timeout)
        if not acquired:
            raise StoreTimeoutError(f"{operation}: timed out waiting for store lock")

    def append(self, value: int, *, timeout: Optional[float] = None) -> None:
        self._acquire(timeout, "inmemory.append")
        try:
            self._numbers.append(value)
        finally:
            self._lock.release()

    def scan_all(self, *, timeout: Optional[float] = None) -> List[int]:
        self._acquire(timeout, "inmemory.scan_all")
        try:
            return list(self._numbers)
        finally:
            self._lock.release()

    def ping(self, *, timeout: Optional[float] = None) -> bool:
        return True


__all__ = ["InMemoryNumberStore"]
