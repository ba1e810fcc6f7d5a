"""Configuration management for Block Version."""

from .loader import DEFAULT_CONFIG, load_config, parse_config, save_default_config
from .models import LoggingConfig, PolicyConfig, Settings, WhitelistConfig


__all__ = [
    "DEFAULT_CONFIG",
    "LoggingConfig",
    "PolicyConfig",
    "Settings",
    "WhitelistConfig",
    "load_config",
    "parse_config",
    "save_default_config",
]
