"""Turn direction-tagged peak events into period measurements."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .models import Direction, PeakMemory, PeriodRecord, coerce_displacement

logger = logging.getLogger(__name__)


class PeakPeriodDetector:
    """
    Measure the time between consecutive peaks of the same direction.

    Upward and downward peaks are tracked independently, so each direction
    yields its own stream of full-cycle periods. A period is only recorded
    when it is strictly positive; duplicate or re-entrant peak events at the
    same timestamp still update the peak memory but produce no record.
    """

    __slots__ = ("_memory", "_records")

    def __init__(self) -> None:
        self._memory = PeakMemory()
        self._records: List[PeriodRecord] = []

    def on_peak(
        self,
        direction: Direction | int,
        t: float,
        displacement: Any,
        *,
        eligible: bool,
    ) -> Optional[PeriodRecord]:
        """
        Handle one peak event at clock time ``t``.

        Returns the new :class:`PeriodRecord`, or ``None`` when the event was
        ignored or opened the first interval for its direction.
        """
        if not eligible:
            return None
        direction = Direction.coerce(direction)
        t = float(t)

        record: Optional[PeriodRecord] = None
        last = self._memory.get(direction)
        if last is not None:
            period = t - last
            if period > 0:
                record = PeriodRecord(
                    t=t,
                    period=period,
                    y=coerce_displacement(displacement),
                    direction=direction,
                )
                self._records.append(record)
                logger.debug(
                    "Period %.4f s closed by %s peak at t=%.4f s",
                    period,
                    direction.name,
                    t,
                )

        self._memory.remember(direction, t)
        return record

    def last_peak(self, direction: Direction | int) -> Optional[float]:
        return self._memory.get(Direction.coerce(direction))

    def forget_peaks(self) -> None:
        """Drop peak memory so the next peak of either direction starts fresh."""
        self._memory.forget()

    def clear(self) -> None:
        self._records.clear()
        self._memory.forget()

    @property
    def records(self) -> Tuple[PeriodRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)
