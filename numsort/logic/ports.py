"""Capability sets consumed and exposed by the ordering service.

`NumberStore` is what the service needs from persistence; `OrderingPort` is
what the request boundary needs from the service. Both are structural so any
object with matching methods (including test doubles) can stand in.
"""

from __future__ import annotations

from typing import Optional, Protocol, Sequence


class NumberStore(Protocol):
    """Durable, append-only keeper of integers."""

    def append(self, value: int, *, timeout: Optional[float] = None) -> None:
        """Record one integer.

        Args:
            value: Any signed integer; no range validation at this layer
            timeout: Seconds before the operation must abort, or None

        Raises:
            StoreError: If the value could not be recorded
        """
        ...

    def scan_all(self, *, timeout: Optional[float] = None) -> Sequence[int]:
        """Return every recorded integer in unspecified order.

        Returns an empty sequence when nothing has been recorded.

        Raises:
            StoreError: If the scan could not complete
        """
        ...


class OrderingPort(Protocol):
    """Accept numbers and list them back in ascending order."""

    def accept(self, value: int, *, timeout: Optional[float] = None) -> None:
        ...

    def list_sorted(self, *, timeout: Optional[float] = None) -> list[int]:
        ...


__all__ = ["NumberStore", "OrderingPort"]
