"""Shared path constants for the configuration file and logs."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_path, user_log_path

APP_NAME = 'menu-clock'

CONFIG_DIR = user_config_path(APP_NAME)
LOG_DIR = user_log_path(APP_NAME)

DEFAULT_CONFIG_PATHS = [
    CONFIG_DIR / 'config.yaml',
    CONFIG_DIR / 'config.yml',
]


def default_config_path() -> Path:
    """First existing default path, or the canonical ``config.yaml`` when none exists."""
    for path in DEFAULT_CONFIG_PATHS:
        if path.exists():
            return path
    return DEFAULT_CONFIG_PATHS[0]
