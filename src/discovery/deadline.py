"""
Wall-clock deadline shared by every orchestrator stage.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass(frozen=True)
class Deadline:
    """
    Absolute epoch-seconds deadline; None means unbounded.

    Stages call is_expired() before starting new work. Work already in
    flight is bounded by its own request timeouts, not by the deadline.
    """
    at: Optional[float] = None
    clock: Callable[[], float] = field(default=time.time, compare=False, repr=False)

    @classmethod
    def after(cls, seconds: Optional[float], clock: Callable[[], float] = time.time) -> "Deadline":
        if seconds is None:
            return cls(None, clock)
        return cls(clock() + seconds, clock)

    def is_expired(self) -> bool:
        return self.at is not None and self.clock() >= self.at

    def remaining(self) -> Optional[float]:
        """Seconds left (never negative), or None when unbounded."""
        if self.at is None:
            return None
        return max(0.0, self.at - self.clock())
