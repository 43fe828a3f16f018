"""Continuous displacement sampling while a session is recording."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from .models import Sample, coerce_displacement

logger = logging.getLogger(__name__)


class SampleRecorder:
    """Append-only buffer of :class:`Sample` objects in chronological order."""

    __slots__ = ("_samples",)

    def __init__(self) -> None:
        self._samples: List[Sample] = []

    def maybe_sample(self, t: float, displacement: Any, *, eligible: bool) -> Optional[Sample]:
        """
        Record ``displacement`` at time ``t`` when ``eligible``.

        Returns the appended sample, or ``None`` when nothing was recorded.
        """
        if not eligible:
            return None
        sample = Sample(t=float(t), y=coerce_displacement(displacement))
        self._samples.append(sample)
        return sample

    def clear(self) -> None:
        if self._samples:
            logger.debug("Discarding %d samples", len(self._samples))
        self._samples.clear()

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._samples)
