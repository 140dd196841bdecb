"""Configuration management."""

from dejoiner.config.loader import get_config, load_config, reset_config
from dejoiner.config.schema import DejoinerConfig
from dejoiner.config.settings import AppSettings, SettingsCache

__all__ = [
    "AppSettings",
    "DejoinerConfig",
    "SettingsCache",
    "get_config",
    "load_config",
    "reset_config",
]
