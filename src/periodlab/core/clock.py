from __future__ import annotations

import math


class ClockAccumulator:
    """
    Recording-relative time in seconds.

    The clock only moves forward, and only while the caller reports that the
    session is running (recording active and simulation playing). Samples for
    a tick must read :meth:`current_time` before :meth:`advance` is called so
    that the first sample of a session lands on ``t == 0``.
    """

    __slots__ = ("_seconds",)

    def __init__(self) -> None:
        self._seconds = 0.0

    @property
    def seconds(self) -> float:
        return self._seconds

    def current_time(self) -> float:
        return self._seconds

    def advance(self, dt: float, *, running: bool) -> float:
        """Add ``dt`` when ``running``; non-positive or non-finite steps are ignored."""
        if not running:
            return self._seconds
        try:
            step = float(dt)
        except (TypeError, ValueError):
            return self._seconds
        if step > 0.0 and math.isfinite(step):
            self._seconds += step
        return self._seconds

    def reset(self) -> None:
        self._seconds = 0.0
