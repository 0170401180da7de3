"""Fixed-rate tick clock for the driving loop."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .constants import CLOCK_PERIOD


@dataclass
class TickClock:
    """Decides when the next interpreter tick is due.

    A tick is due once at least one full period has elapsed since the
    previous one. Missed periods are not replayed as a burst; the logical
    rate simply slows down when the host falls behind.
    """

    period: float = CLOCK_PERIOD

    def __post_init__(self) -> None:
        if self.period <= 0:
            raise ValueError(f"period must be positive, got {self.period}")
        self._next: Optional[float] = None

    def reset(self) -> None:
        self._next = None

    def due(self, now: float) -> bool:
        """Return True (and schedule the following tick) if one is due at ``now``."""
        if self._next is None or now >= self._next:
            self._next = now + self.period
            return True
        return False

    def time_until_due(self, now: float) -> float:
        if self._next is None:
            return 0.0
        return max(0.0, self._next - now)

    @property
    def next_tick(self) -> Optional[float]:
        return self._next


__all__ = ["TickClock"]
