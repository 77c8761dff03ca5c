"""Error taxonomy for the number store and the ordering service.

Store implementations raise `StoreError` (or `StoreTimeoutError` when the
caller's time boundary passes). The ordering service re-raises those as
`OperationError`, chained to the original cause, so the request boundary can
log the failure and map it to a client-visible status.
"""

from __future__ import annotations


class NumsortError(Exception):
    """Base class for all service errors."""


class StoreError(NumsortError):
    """Persistence failure: connectivity, I/O or malformed stored data."""


class StoreTimeoutError(StoreError):
    """The operation was aborted because its time boundary passed."""


class OperationError(NumsortError):
    def __init__(self, operation: str, cause: StoreError) -> None:
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause

    @property
    def timed_out(self) -> bool:
        return isinstance(self.cause, StoreTimeoutError)


def raise_if_expired(timeout: float | None, operation: str) -> None:
    """Fail fast when the caller's time boundary has already passed."""
    if timeout is not None and timeout <= 0:
        raise StoreTimeoutError(f"{operation}: timeout expired before start")


__all__ = [
    "raise_if_expired",
    "NumsortError",
    "StoreError",
    "StoreTimeoutError",
    "OperationError",
]
