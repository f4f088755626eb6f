"""Configuration management.

This module handles configuration loading and validation.
"""

from __future__ import annotations

from btmeta.config.config import (
    ConfigManager,
    get_config,
    get_executor_config,
    get_observability_config,
    init_config,
    reset_config,
)
from btmeta.models import Config

__all__ = [
    "Config",
    "ConfigManager",
    "get_config",
    "get_executor_config",
    "get_observability_config",
    "init_config",
    "reset_config",
]
