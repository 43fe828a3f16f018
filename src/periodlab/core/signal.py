"""Read-on-demand view of the oscillating subject being recorded."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol


class SubjectSignal(Protocol):
    """
    What the recorder needs to know about the subject at any instant.

    ``subject_attached`` is False when nothing hangs from the spring,
    ``user_controlled`` is True while the subject is being dragged by hand.
    ``displacement`` is measured relative to the centre of oscillation and may
    be malformed; the recorder substitutes ``0.0`` for anything non-numeric.
    """

    @property
    def subject_attached(self) -> bool:  # pragma: no cover - protocol
        ...

    @property
    def user_controlled(self) -> bool:  # pragma: no cover - protocol
        ...

    @property
    def displacement(self) -> Any:  # pragma: no cover - protocol
        ...

    @property
    def velocity(self) -> float:  # pragma: no cover - protocol
        ...


@dataclass
class StaticSubject:
    """Plain mutable subject, updated by whoever drives the signal."""

    subject_attached: bool = True
    user_controlled: bool = False
    displacement: Any = 0.0
    velocity: float = 0.0
