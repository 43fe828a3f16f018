"""Shared dataclasses for PeriodLab recording sessions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real
from typing import Any, Optional


class Direction(Enum):
    """Side of the oscillation a peak event closes."""

    UP = 1
    DOWN = -1

    @classmethod
    def coerce(cls, value: Any) -> "Direction":
        """Accept a ``Direction`` or the raw ``+1``/``-1`` emitted by a peak source."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Integral) and not isinstance(value, bool) and int(value) in (1, -1):
            return cls(int(value))
        raise ValueError(f"peak direction must be +1 or -1, got {value!r}")


class RecordingPhase(Enum):
    IDLE = "idle"
    RECORDING = "recording"


@dataclass(frozen=True, slots=True)
class Sample:
    t: float
    y: float


@dataclass(frozen=True, slots=True)
class PeriodRecord:
    """
    One measured period.

    ``t`` is the time of the peak that closed the interval, ``period`` the
    time elapsed since the previous peak of the same direction and ``y`` the
    displacement at the closing peak. ``direction`` is ``None`` for records
    parsed back from an export, which does not carry it.
    """

    t: float
    period: float
    y: float
    direction: Optional[Direction] = None


@dataclass(frozen=True, slots=True)
class RecordingState:
    active: bool
    clock_seconds: float


class PeakMemory:
    """
    Last-seen peak time for each direction.

    Exactly two slots exist; a slot holds ``None`` until a peak of that
    direction has been seen in the current session.
    """

    __slots__ = ("_up", "_down")

    def __init__(self) -> None:
        self._up: Optional[float] = None
        self._down: Optional[float] = None

    def get(self, direction: Direction) -> Optional[float]:
        return self._up if direction is Direction.UP else self._down

    def remember(self, direction: Direction, t: float) -> None:
        if direction is Direction.UP:
            self._up = t
        else:
            self._down = t

    def forget(self) -> None:
        self._up = None
        self._down = None

    def is_empty(self) -> bool:
        return self._up is None and self._down is None

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"PeakMemory(up={self._up!r}, down={self._down!r})"


def coerce_displacement(value: Any) -> float:
    """Return ``value`` as a float, or ``0.0`` when it is not a finite number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    result = float(value)
    if not math.isfinite(result):
        return 0.0
    return result
