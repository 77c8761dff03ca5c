"""Per-request time budget.

One request gets one timeout. Every store call made while serving it receives
only the time still left, so a sequence of calls cannot overrun the budget.
"""

from __future__ import annotations

from time import monotonic
from typing import Callable


class RequestBudget:
    def __init__(self, timeout: float, clock: Callable[[], float] = monotonic) -> None:
        self._clock = clock
        self.timeout = timeout
        self._deadline = clock() + timeout

    def remaining(self) -> float:
        """Seconds left; zero or negative once the deadline has passed."""
        return self._deadline - self._clock()


__all__ = ["RequestBudget"]
