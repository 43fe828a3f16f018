"""Core recording engine: clock, buffers, peak handling and lifecycle.

Everything here is toolkit-agnostic. A host application calls
:meth:`RecordingController.step` once per frame, forwards peak events to
:meth:`RecordingController.on_peak` and wires its start/stop/reset/export
actions to the controller's methods.
"""

from .clock import ClockAccumulator
from .controller import RecordingController, is_eligible
from .models import (
    Direction,
    PeakMemory,
    PeriodRecord,
    RecordingPhase,
    RecordingState,
    Sample,
    coerce_displacement,
)
from .peak_detector import PeakPeriodDetector
from .sample_recorder import SampleRecorder
from .signal import StaticSubject, SubjectSignal

__all__ = [
    "ClockAccumulator",
    "RecordingController",
    "is_eligible",
    "Direction",
    "PeakMemory",
    "PeriodRecord",
    "RecordingPhase",
    "RecordingState",
    "Sample",
    "coerce_displacement",
    "PeakPeriodDetector",
    "SampleRecorder",
    "StaticSubject",
    "SubjectSignal",
]
