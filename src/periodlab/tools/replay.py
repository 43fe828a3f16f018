#!/usr/bin/env python3
"""
Replay a recorded displacement trace through the period recorder.

The trace is a two-column ``t,y`` CSV (optional header) where ``y`` is the
displacement relative to the centre of oscillation. Each row becomes one
simulation tick: the subject is updated, any peak closed at that row is
emitted (``+1`` at a maximum, ``-1`` at a minimum), then the recorder steps.
The resulting ``period_vs_time.csv`` is written to the export folder, or to
stdout when the folder cannot be written.

Example::

    periodlab-replay trace.csv --start-at 0.5 --hide-at 3 --show-at 4 -v
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from ..analysis.period_stats import summarize_by_direction
from ..config.runtime import PeriodLabConfig, load_config
from ..core.controller import RecordingController
from ..core.models import Direction
from ..core.signal import StaticSubject
from ..dataio.delivery import DeliveryError, DocumentDelivery, FileDelivery, StreamDelivery
from ..dataio.file_paths import export_directory
from ..dataio.export_csv import ExportResult
from ..dataio.trace_loader import load_trace

logger = logging.getLogger(__name__)


# --------------------------------------------------------------------------- # helpers
def peak_directions(y: np.ndarray) -> np.ndarray:
    """
    Return an int array the size of ``y`` with ``+1`` at local maxima,
    ``-1`` at local minima and ``0`` elsewhere.

    Flat stretches (zero slope) never count as a turning point.
    """
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    out = np.zeros(y.size, dtype=np.int8)
    if y.size < 3:
        return out
    slope = np.sign(np.diff(y))
    before, after = slope[:-1], slope[1:]
    out[1:-1][(before > 0) & (after < 0)] = Direction.UP.value
    out[1:-1][(before < 0) & (after > 0)] = Direction.DOWN.value
    return out


def forward_velocity(t: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Forward-difference velocity; the last point repeats its predecessor."""
    t = np.asarray(t, dtype=np.float64).reshape(-1)
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    if t.size < 2:
        return np.zeros(t.size, dtype=np.float64)
    dt = np.diff(t)
    with np.errstate(divide="ignore", invalid="ignore"):
        v = np.where(dt > 0, np.diff(y) / dt, 0.0)
    return np.append(v, v[-1])


def tick_durations(t: np.ndarray) -> np.ndarray:
    """Per-row ``dt`` so that row ``i`` moves the clock to ``t[i + 1]``."""
    t = np.asarray(t, dtype=np.float64).reshape(-1)
    if t.size < 2:
        return np.zeros(t.size, dtype=np.float64)
    dt = np.diff(t)
    return np.append(dt, dt[-1])


def replay_trace(
    t: np.ndarray,
    y: np.ndarray,
    controller: RecordingController,
    subject: StaticSubject,
    *,
    start_at: float = 0.0,
    stop_at: Optional[float] = None,
    hide_at: Optional[float] = None,
    show_at: Optional[float] = None,
) -> None:
    """
    Drive ``controller`` with one tick per trace row.

    Recording starts at the first row with ``t >= start_at`` and stops at
    the first row with ``t >= stop_at``. ``hide_at``/``show_at`` toggle the
    recording feature's visibility, which pauses period measurement.
    """
    t = np.asarray(t, dtype=np.float64).reshape(-1)
    y = np.asarray(y, dtype=np.float64).reshape(-1)
    if t.size != y.size:
        raise ValueError("t and y must have the same number of elements.")

    peaks = peak_directions(y)
    velocity = forward_velocity(t, y)
    durations = tick_durations(t)

    started = False
    for i in range(t.size):
        now = float(t[i])
        if not started and now >= start_at:
            controller.start()
            started = True
        if stop_at is not None and controller.is_recording and now >= stop_at:
            controller.stop()
        if hide_at is not None and controller.feature_visible and now >= hide_at:
            if show_at is None or now < show_at:
                controller.set_feature_visible(False)
        if show_at is not None and not controller.feature_visible and now >= show_at:
            controller.set_feature_visible(True)

        subject.displacement = float(y[i])
        subject.velocity = float(velocity[i])
        if peaks[i]:
            controller.on_peak(int(peaks[i]))
        controller.step(float(durations[i]))

    controller.stop()


def _build_deliveries(cfg: PeriodLabConfig, to_stdout: bool) -> tuple[DocumentDelivery, Optional[DocumentDelivery]]:
    if to_stdout:
        return StreamDelivery(), None
    directory = export_directory(cfg.export_dir)
    fallback = StreamDelivery() if cfg.fallback_to_stdout else None
    return FileDelivery(directory), fallback


def _log_summary(controller: RecordingController, result: Optional[ExportResult]) -> None:
    for direction, summary in summarize_by_direction(controller.period_records).items():
        if summary.count == 0:
            logger.info("%s peaks: no periods measured", direction.name)
            continue
        logger.info(
            "%s peaks: %d periods, mean %.4f s (std %.4f s), %.3f Hz",
            direction.name,
            summary.count,
            summary.mean_s,
            summary.std_s,
            summary.frequency_hz,
        )
    if result is None:
        logger.info("No data recorded; nothing exported")
    else:
        logger.info("Exported %d rows to %s", result.row_count, result.target)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay a displacement trace and export period_vs_time.csv")
    parser.add_argument("trace", type=Path, help="CSV file with t,y columns")
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML file describing PeriodLabConfig overrides",
    )
    parser.add_argument("--output-dir", type=Path, help="Directory for the exported CSV")
    parser.add_argument("--filename", help="Override the export filename")
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Write the CSV to stdout instead of a file",
    )
    parser.add_argument("--start-at", type=float, default=0.0, help="Trace time (s) to start recording")
    parser.add_argument("--stop-at", type=float, help="Trace time (s) to stop recording")
    parser.add_argument("--hide-at", type=float, help="Trace time (s) to hide the recording feature")
    parser.add_argument("--show-at", type=float, help="Trace time (s) to show it again")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _resolve_config(args: argparse.Namespace) -> PeriodLabConfig:
    cfg = load_config(args.config) if args.config else PeriodLabConfig()
    if args.output_dir is not None:
        cfg.export_dir = args.output_dir
    if args.filename:
        cfg.export_filename = args.filename
    if args.verbose:
        cfg.log_level = "DEBUG"
    return cfg.sanitized()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    cfg = _resolve_config(args)

    logging.basicConfig(
        level=cfg.log_level_value(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        t, y = load_trace(args.trace)
    except (OSError, ValueError) as exc:
        logger.error("Could not load trace %s: %s", args.trace, exc)
        return 1

    subject = StaticSubject()
    controller = RecordingController(
        subject,
        feature_visible=cfg.feature_visible,
        export_filename=cfg.export_filename,
    )
    replay_trace(
        t,
        y,
        controller,
        subject,
        start_at=args.start_at,
        stop_at=args.stop_at,
        hide_at=args.hide_at,
        show_at=args.show_at,
    )

    delivery, fallback = _build_deliveries(cfg, args.stdout)
    try:
        result = controller.export(delivery, fallback)
    except DeliveryError as exc:
        logger.error("%s", exc)
        return 2

    _log_summary(controller, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
