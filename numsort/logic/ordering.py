"""Ordering service: accept numbers and return them sorted on read.

The service holds no state of its own besides its collaborators; one
instance serves concurrent requests without locking. Stores return entries
in arbitrary order.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from numsort.logic.errors import OperationError, StoreError
from numsort.logic.ports import NumberStore

OP_ACCEPT = "accept"
OP_LIST_SORTED = "list_sorted"


def sort_numbers(numbers: Optional[Iterable[int]]) -> list[int]:
    """Return a new list in ascending numeric order; None sorts to []."""
    if numbers is None:
        return []
    return sorted(numbers)


class OrderingService:
    def __init__(self, store: NumberStore, logger: logging.Logger) -> None:
        self._store = store
        self._log = logger

    def accept(self, value: int, *, timeout: Optional[float] = None) -> None:
        try:
            self._store.append(value, timeout=timeout)
        except StoreError as exc:
            self._log.error("ordering.accept.failed op=%s error=%s", OP_ACCEPT, exc)
            raise OperationError(OP_ACCEPT, exc) from exc
        self._log.debug("ordering.accept.ok value=%s", value)

    def list_sorted(self, *, timeout: Optional[float] = None) -> list[int]:
        try:
            numbers = self._store.scan_all(timeout=timeout)
        except StoreError as exc:
            self._log.error("ordering.list_sorted.failed op=%s error=%s", OP_LIST_SORTED, exc)
            raise OperationError(OP_LIST_SORTED, exc) from exc
        result = sort_numbers(numbers)
        self._log.debug("ordering.list_sorted.ok count=%d", len(result))
        return result


__all__ = ["OrderingService", "sort_numbers", "OP_ACCEPT", "OP_LIST_SORTED"]
