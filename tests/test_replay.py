from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from periodlab.core import Direction, RecordingController, StaticSubject
from periodlab.tools.replay import main, peak_directions, replay_trace

PERIOD_S = 1.0
AMPLITUDE_M = 0.05


def _cosine_trace(duration_s: float = 5.0, dt: float = 0.01) -> tuple[np.ndarray, np.ndarray]:
    t = np.arange(int(round(duration_s / dt))) * dt
    y = AMPLITUDE_M * np.cos(2.0 * np.pi * t / PERIOD_S)
    return t, y


def _write_trace(path: Path) -> Path:
    t, y = _cosine_trace()
    lines = ["t,y"] + [f"{float(ti)!r},{float(yi)!r}" for ti, yi in zip(t, y)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_peak_directions_marks_extrema() -> None:
    y = np.array([0.0, 1.0, 0.0, -1.0, 0.0, 0.0, 1.0])
    np.testing.assert_array_equal(peak_directions(y), [0, 1, 0, -1, 0, 0, 0])


def test_replay_measures_cosine_period() -> None:
    t, y = _cosine_trace()
    subject = StaticSubject()
    controller = RecordingController(subject)

    replay_trace(t, y, controller, subject)

    assert not controller.is_recording
    assert len(controller.samples) == t.size
    assert controller.samples[0].t == 0.0

    up = [r for r in controller.period_records if r.direction is Direction.UP]
    down = [r for r in controller.period_records if r.direction is Direction.DOWN]
    assert len(up) == 3
    assert len(down) == 4
    for record in controller.period_records:
        assert record.period == pytest.approx(PERIOD_S, abs=0.011)


def test_replay_hide_window_skips_periods() -> None:
    t, y = _cosine_trace()
    subject = StaticSubject()
    controller = RecordingController(subject)

    replay_trace(t, y, controller, subject, hide_at=1.8, show_at=2.2)

    up_times = [round(r.t, 2) for r in controller.period_records if r.direction is Direction.UP]
    # The maximum at t=2 falls in the hidden window and the one at t=3 has
    # nothing to measure from, so only t=4 closes an upward period.
    assert up_times == [4.0]


def test_main_writes_export_file(tmp_path: Path) -> None:
    trace = _write_trace(tmp_path / "trace.csv")
    out_dir = tmp_path / "out"

    assert main([str(trace), "--output-dir", str(out_dir)]) == 0

    lines = (out_dir / "period_vs_time.csv").read_text(encoding="utf-8").splitlines()
    assert lines[0] == "kind,time_s,period_s,y_rel_center_m"
    assert lines[1] == "sample,0.000,,0.0500"
    assert sum(1 for line in lines if line.startswith("period,")) == 7


def test_main_stdout_mode(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    trace = _write_trace(tmp_path / "trace.csv")

    assert main([str(trace), "--stdout", "--start-at", "10"]) == 0

    # Recording never starts, so there is nothing to print.
    assert capsys.readouterr().out == ""

    assert main([str(trace), "--stdout"]) == 0
    assert capsys.readouterr().out.startswith("kind,time_s,period_s,y_rel_center_m\n")


def test_main_reports_missing_trace(tmp_path: Path) -> None:
    assert main([str(tmp_path / "missing.csv")]) == 1


def test_main_defaults_to_data_root_exports(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PERIODLAB_DATA_ROOT", str(tmp_path / "data"))
    trace = _write_trace(tmp_path / "trace.csv")

    assert main([str(trace), "--filename", "run 1.csv"]) == 0

    assert (tmp_path / "data" / "exports" / "run_1.csv").is_file()
