"""Time references sampled by the evaluator."""

import time
from collections.abc import Callable
from typing import TypeAlias

Clock: TypeAlias = Callable[[], float]
"""Zero-argument callable returning the current time in seconds."""


class MonotonicClock:
    """Seconds elapsed since the clock was created."""

    def __init__(self) -> None:
        self._start = time.monotonic()

    def __call__(self) -> float:
        return time.monotonic() - self._start


class ManualClock:
    """A clock that only moves when told to.

    Used to drive evaluation at a fixed step, independent of wall time.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, dt: float) -> float:
        """Move the clock forward by ``dt`` seconds and return the new time.

        Raises:
            ValueError: If ``dt`` is negative.

        """
        if dt < 0:
            msg = f"Cannot move clock backwards (dt={dt})"
            raise ValueError(msg)
        self._now += dt
        return self._now

    def set(self, now: float) -> None:
        """Jump to an absolute time, which must not be earlier than the current one.

        Raises:
            ValueError: If ``now`` is earlier than the current time.

        """
        self.advance(now - self._now)
