import math

import pytest

from periodlab.analysis.period_stats import summarize_by_direction, summarize_periods
from periodlab.core.models import Direction, PeriodRecord


def _records() -> list[PeriodRecord]:
    return [
        PeriodRecord(t=1.0, period=1.0, y=0.05, direction=Direction.UP),
        PeriodRecord(t=1.5, period=0.9, y=-0.05, direction=Direction.DOWN),
        PeriodRecord(t=2.1, period=1.1, y=0.05, direction=Direction.UP),
        PeriodRecord(t=2.5, period=1.0, y=-0.05),
    ]


def test_summary_over_all_records() -> None:
    summary = summarize_periods(_records())
    assert summary.count == 4
    assert summary.mean_s == pytest.approx(1.0)
    assert summary.min_s == pytest.approx(0.9)
    assert summary.max_s == pytest.approx(1.1)
    assert summary.frequency_hz == pytest.approx(1.0)


def test_summary_filtered_by_direction() -> None:
    up = summarize_periods(_records(), 1)
    assert up.count == 2
    assert up.mean_s == pytest.approx(1.05)
    assert up.std_s == pytest.approx(0.05)


def test_empty_summary_is_nan() -> None:
    summary = summarize_periods([])
    assert summary.count == 0
    assert math.isnan(summary.mean_s)
    assert math.isnan(summary.frequency_hz)


def test_summarize_by_direction_covers_both_directions() -> None:
    by_direction = summarize_by_direction(_records())
    assert set(by_direction) == {Direction.UP, Direction.DOWN}
    assert by_direction[Direction.DOWN].count == 1
    assert by_direction[Direction.DOWN].mean_s == pytest.approx(0.9)
