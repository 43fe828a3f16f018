"""Post-processing of recorded period measurements.

Helpers here operate on sequences of :class:`~periodlab.core.models.PeriodRecord`
using NumPy and stay free of I/O so they work equally on live controller
buffers and on datasets loaded back from an export.
"""

from .period_stats import PeriodSummary, summarize_by_direction, summarize_periods

__all__ = ["PeriodSummary", "summarize_by_direction", "summarize_periods"]
