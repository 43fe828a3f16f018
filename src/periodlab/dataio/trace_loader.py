"""Utilities for loading displacement traces and exported datasets."""

import csv
import io
from pathlib import Path
from typing import List, Tuple

import numpy as np

from ..core.models import PeriodRecord, Sample
from .export_csv import EXPORT_HEADER, KIND_PERIOD, KIND_SAMPLE


def _looks_numeric_csv_line(line: str) -> bool:
    """Heuristically decide if a CSV line is numeric-only (no header)."""
    stripped = line.strip()
    if not stripped:
        return False
    tokens = [t for t in stripped.split(",") if t]
    if not tokens:
        return False
    try:
        for t in tokens:
            float(t)
        return True
    except ValueError:
        return False


def load_trace(path: Path) -> Tuple[np.ndarray, np.ndarray]:
    """
    Load a two-column ``t,y`` displacement trace.

    The file may optionally include a single header row, which will be
    skipped automatically. Returns ``(times, displacements)`` as float64
    arrays.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        first_line = f.readline()
        rest = f.read()

    # Decide if the first line is header or data
    if _looks_numeric_csv_line(first_line):
        buffer = io.StringIO(first_line + rest)
    else:
        buffer = io.StringIO(rest)

    data = np.loadtxt(buffer, delimiter=",", dtype=np.float64, ndmin=2)
    if data.size == 0:
        return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
    if data.shape[1] < 2:
        raise ValueError(f"{path} must have at least two columns (t, y), got {data.shape[1]}")
    return data[:, 0], data[:, 1]


def load_export(path: Path) -> Tuple[List[Sample], List[PeriodRecord]]:
    """Parse an exported ``period_vs_time.csv`` back into samples and periods."""
    path = Path(path)
    samples: List[Sample] = []
    records: List[PeriodRecord] = []
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None:
            return samples, records
        if tuple(h.strip() for h in header) != EXPORT_HEADER:
            raise ValueError(f"{path} does not start with the export header {','.join(EXPORT_HEADER)}")
        for lineno, row in enumerate(reader, start=2):
            if not row:
                continue
            if len(row) != len(EXPORT_HEADER):
                raise ValueError(f"{path}:{lineno}: expected {len(EXPORT_HEADER)} fields, got {len(row)}")
            kind, time_s, period_s, y = row
            if kind == KIND_SAMPLE:
                samples.append(Sample(t=float(time_s), y=float(y)))
            elif kind == KIND_PERIOD:
                records.append(PeriodRecord(t=float(time_s), period=float(period_s), y=float(y)))
            else:
                raise ValueError(f"{path}:{lineno}: unknown row kind {kind!r}")
    return samples, records
