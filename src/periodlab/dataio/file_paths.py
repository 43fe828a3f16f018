"""Helpers for constructing export file paths."""

import re
from pathlib import Path

from ..config.app_config import AppPaths

DEFAULT_EXPORT_NAME = "period_vs_time.csv"

# Allow only alphanumerics, underscore, dot, and dash.
_FILENAME_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def sanitize_filename(name: str) -> str:
    """
    Sanitize an export filename.

    - Replace disallowed characters with '_'.
    - Strip leading/trailing underscores and dots.
    - Fall back to 'period_vs_time.csv' if nothing remains.
    """
    cleaned = _FILENAME_RE.sub("_", str(name or "")).strip("_.")
    return cleaned or DEFAULT_EXPORT_NAME


def export_directory(base: Path | None = None) -> Path:
    """Return ``base`` (user-expanded) or the default ``data/exports`` folder."""
    root = base or AppPaths().exports
    return Path(root).expanduser()

