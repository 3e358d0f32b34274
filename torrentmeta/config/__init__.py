"""Configuration loading for torrentmeta."""

from __future__ import annotations

from torrentmeta.config.config import (
    ConfigManager,
    get_config,
    init_config,
    reload_config,
    reset_config,
    set_config,
)

__all__ = [
    "ConfigManager",
    "get_config",
    "init_config",
    "reload_config",
    "reset_config",
    "set_config",
]
