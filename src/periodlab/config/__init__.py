"""Configuration objects and helpers for PeriodLab.

:mod:`runtime` loads the optional YAML file that controls where exports are
written and how verbose logging is; :mod:`app_config` knows the default
``data/exports`` folder and its environment override.
"""

from .app_config import AppPaths
from .runtime import PeriodLabConfig, config_from_mapping, load_config

__all__ = ["AppPaths", "PeriodLabConfig", "config_from_mapping", "load_config"]
