"""Runtime configuration for the recorder and its export step."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml

DEFAULT_EXPORT_FILENAME = "period_vs_time.csv"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(slots=True)
class PeriodLabConfig:
    """
    Knobs for where exports go and how loudly the recorder logs.

    ``export_dir`` of ``None`` means the default ``data/exports`` folder.
    """

    export_filename: str = DEFAULT_EXPORT_FILENAME
    export_dir: Optional[Path] = None
    fallback_to_stdout: bool = True
    feature_visible: bool = True
    log_level: str = "INFO"

    def sanitized(self) -> PeriodLabConfig:
        """Return a copy with normalised values."""
        level = str(self.log_level or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            level = "INFO"
        export_dir = Path(self.export_dir).expanduser() if self.export_dir else None
        return PeriodLabConfig(
            export_filename=str(self.export_filename or "").strip() or DEFAULT_EXPORT_FILENAME,
            export_dir=export_dir,
            fallback_to_stdout=bool(self.fallback_to_stdout),
            feature_visible=bool(self.feature_visible),
            log_level=level,
        )

    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`PeriodLabConfig`."""
    return {f.name for f in fields(PeriodLabConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten known nesting patterns (e.g. top-level ``recorder`` key)."""
    if "recorder" in data and isinstance(data["recorder"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "recorder":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> PeriodLabConfig:
    """Build :class:`PeriodLabConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return PeriodLabConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return PeriodLabConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> PeriodLabConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`PeriodLabConfig`.
    """
    if path is None:
        return PeriodLabConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return PeriodLabConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["PeriodLabConfig", "config_from_mapping", "load_config"]
