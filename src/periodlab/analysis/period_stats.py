from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import numpy as np

from ..core.models import Direction, PeriodRecord


@dataclass(frozen=True)
class PeriodSummary:
    """Descriptive statistics over a set of measured periods (seconds)."""

    count: int
    mean_s: float
    std_s: float
    min_s: float
    max_s: float
    frequency_hz: float

    @classmethod
    def empty(cls) -> "PeriodSummary":
        nan = math.nan
        return cls(count=0, mean_s=nan, std_s=nan, min_s=nan, max_s=nan, frequency_hz=nan)


def summarize_periods(
    records: Iterable[PeriodRecord],
    direction: Optional[Direction | int] = None,
) -> PeriodSummary:
    """
    Summarise ``records``, optionally only those closed by ``direction``.

    Parameters
    ----------
    records:
        Period records, e.g. :attr:`RecordingController.period_records`.
    direction:
        ``Direction.UP``/``Direction.DOWN`` (or ``+1``/``-1``) to restrict the
        summary to one half of the cycle. Records without a direction are
        excluded when a direction is given.

    Returns
    -------
    PeriodSummary
        ``count == 0`` with NaN statistics when nothing matches. The standard
        deviation is the population value (``ddof=0``).
    """
    wanted = Direction.coerce(direction) if direction is not None else None
    periods = np.fromiter(
        (r.period for r in records if wanted is None or r.direction is wanted),
        dtype=np.float64,
    )
    if periods.size == 0:
        return PeriodSummary.empty()

    mean = float(np.mean(periods))
    return PeriodSummary(
        count=int(periods.size),
        mean_s=mean,
        std_s=float(np.std(periods)),
        min_s=float(np.min(periods)),
        max_s=float(np.max(periods)),
        frequency_hz=1.0 / mean if mean > 0 else math.nan,
    )


def summarize_by_direction(records: Iterable[PeriodRecord]) -> Dict[Direction, PeriodSummary]:
    """Return one :class:`PeriodSummary` per peak direction."""
    records = list(records)
    return {d: summarize_periods(records, d) for d in Direction}
