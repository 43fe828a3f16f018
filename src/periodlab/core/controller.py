"""Recording lifecycle: start/stop/reset plus per-tick and per-peak routing."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..dataio.delivery import DocumentDelivery
from ..dataio.export_csv import DEFAULT_FILENAME, ExportResult, export_dataset
from .clock import ClockAccumulator
from .models import (
    Direction,
    PeriodRecord,
    RecordingPhase,
    RecordingState,
    Sample,
)
from .peak_detector import PeakPeriodDetector
from .sample_recorder import SampleRecorder
from .signal import SubjectSignal

logger = logging.getLogger(__name__)


def is_eligible(active: bool, subject: SubjectSignal, feature_visible: bool) -> bool:
    """Shared gate for sampling and peak handling."""
    return bool(
        active
        and subject.subject_attached
        and not subject.user_controlled
        and feature_visible
    )


class RecordingController:
    """
    Single owner of the clock, the sample buffer, the period buffer and the
    peak memory for one recording session.

    Callers drive it from two places: :meth:`step` once per simulation frame
    and :meth:`on_peak` whenever the subject passes an extremum. Neither path
    ever raises for bad input; ineligible events are simply ignored.
    """

    def __init__(
        self,
        subject: SubjectSignal,
        *,
        feature_visible: bool = True,
        export_filename: str = DEFAULT_FILENAME,
    ) -> None:
        self._subject = subject
        self._feature_visible = bool(feature_visible)
        self._export_filename = export_filename
        self._phase = RecordingPhase.IDLE
        self._clock = ClockAccumulator()
        self._sampler = SampleRecorder()
        self._detector = PeakPeriodDetector()

    # ------------------------------------------------------------ lifecycle
    def start(self) -> None:
        """Discard the previous session and begin recording from ``t = 0``."""
        self._clear_session()
        self._phase = RecordingPhase.RECORDING
        logger.info("Recording started")

    def stop(self) -> None:
        """Stop recording; buffered data stays available for export."""
        if self._phase is RecordingPhase.RECORDING:
            logger.info(
                "Recording stopped at t=%.3f s (%d samples, %d periods)",
                self._clock.seconds,
                len(self._sampler),
                len(self._detector),
            )
        self._phase = RecordingPhase.IDLE

    def reset_all(self) -> None:
        self._clear_session()
        self._phase = RecordingPhase.IDLE
        logger.info("Recorder reset")

    def _clear_session(self) -> None:
        self._sampler.clear()
        self._detector.clear()
        self._clock.reset()

    # ------------------------------------------------------------- inputs
    def step(self, dt: float, *, playing: bool = True) -> Optional[Sample]:
        """
        Advance one simulation frame.

        The sample for this frame is taken at the current clock time before
        the clock moves, so a fresh session's first sample sits at ``t = 0``.
        """
        if not playing:
            return None
        sample = self._sampler.maybe_sample(
            self._clock.current_time(),
            self._subject.displacement,
            eligible=self._eligible(),
        )
        self._clock.advance(dt, running=self.is_recording)
        return sample

    def on_peak(self, direction: Direction | int) -> Optional[PeriodRecord]:
        """Handle a peak event (``+1`` upward, ``-1`` downward)."""
        eligible = self._eligible() and self._subject.velocity != 0
        return self._detector.on_peak(
            direction,
            self._clock.current_time(),
            self._subject.displacement,
            eligible=eligible,
        )

    def set_feature_visible(self, visible: bool) -> None:
        """
        Update the visibility flag that gates recording.

        Losing visibility drops peak memory so no period is ever measured
        across the gap, even though the session itself stays active.
        """
        visible = bool(visible)
        if visible == self._feature_visible:
            return
        self._feature_visible = visible
        if not visible:
            self._detector.forget_peaks()
            logger.debug("Feature hidden; peak memory cleared")

    def _eligible(self) -> bool:
        return is_eligible(self.is_recording, self._subject, self._feature_visible)

    # ------------------------------------------------------------- output
    def export(
        self,
        delivery: DocumentDelivery,
        fallback: DocumentDelivery | None = None,
    ) -> Optional[ExportResult]:
        """Render the current buffers as CSV and hand them to ``delivery``."""
        return export_dataset(
            self._sampler.samples,
            self._detector.records,
            delivery,
            fallback,
            filename=self._export_filename,
        )

    # ----------------------------------------------------------- accessors
    @property
    def phase(self) -> RecordingPhase:
        return self._phase

    @property
    def is_recording(self) -> bool:
        return self._phase is RecordingPhase.RECORDING

    @property
    def feature_visible(self) -> bool:
        return self._feature_visible

    @property
    def current_time(self) -> float:
        return self._clock.current_time()

    @property
    def state(self) -> RecordingState:
        return RecordingState(active=self.is_recording, clock_seconds=self._clock.seconds)

    @property
    def samples(self) -> Tuple[Sample, ...]:
        return self._sampler.samples

    @property
    def period_records(self) -> Tuple[PeriodRecord, ...]:
        return self._detector.records

    def last_peak(self, direction: Direction | int) -> Optional[float]:
        return self._detector.last_peak(direction)
