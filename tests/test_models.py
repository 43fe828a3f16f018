import math

import numpy as np
import pytest

from periodlab.core.models import Direction, PeakMemory, coerce_displacement


def test_direction_coerce_accepts_raw_peak_values() -> None:
    assert Direction.coerce(1) is Direction.UP
    assert Direction.coerce(-1) is Direction.DOWN
    assert Direction.coerce(Direction.DOWN) is Direction.DOWN
    assert Direction.coerce(np.int8(-1)) is Direction.DOWN


@pytest.mark.parametrize("value", [0, 2, "up", None, True, 1.7, -1.2, 1.0, "1"])
def test_direction_coerce_rejects_other_values(value) -> None:
    with pytest.raises(ValueError):
        Direction.coerce(value)


def test_peak_memory_tracks_directions_independently() -> None:
    memory = PeakMemory()
    assert memory.is_empty()

    memory.remember(Direction.UP, 1.0)
    assert memory.get(Direction.UP) == 1.0
    assert memory.get(Direction.DOWN) is None

    memory.remember(Direction.DOWN, 1.2)
    memory.forget()
    assert memory.get(Direction.UP) is None
    assert memory.get(Direction.DOWN) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.25, 0.25),
        (-3, -3.0),
        (None, 0.0),
        ("0.1", 0.0),
        (math.nan, 0.0),
        (math.inf, 0.0),
        (True, 0.0),
    ],
)
def test_coerce_displacement(value, expected) -> None:
    assert coerce_displacement(value) == expected
