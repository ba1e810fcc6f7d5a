"""Configuration loader for Block Version."""

import os
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from .models import Settings


DEFAULT_CONFIG = """\
# Versions are written either as releases ("1.12.2") or as protocol
# names ("MINECRAFT_1_12_2").

whitelist:
  # Allow every version between start and end (inclusive)
  enableStartEnd: true
  start: "1.8"
  end: "1.16.4"
  # Additional versions to allow
  allowVersions: []

# Denied versions; overrides the whitelist
blacklist: []

whitelistMessage: "&cYour version is not supported. Please use 1.8 - 1.16.4"
blacklistMessage: "&cYour version is blocked on this server."
bypassMessage: "&eYou are using an unsupported version. Some features may not work."

# Seconds between bypass reminders. 0 = remind once on join, -1 = never
repeatBypassMessage: 600

# Leave empty to disable
recommendedVersion: ""
recommendMessage: "&aFor the best experience use 1.16.4"

failClosed: true

logging:
  level: INFO
  format: console
"""


def expand_env_vars(config: Any) -> Any:
    """Recursively expand environment variables in configuration."""
    if isinstance(config, dict):
        result = {}
        for key, value in config.items():
            result[key] = expand_env_vars(value)
        return result
    elif isinstance(config, list):
        return [expand_env_vars(item) for item in config]
    elif isinstance(config, str):
        # ${VAR:default}
        if config.startswith("${") and "}" in config:
            var_expr = config[2:config.index("}")]
            if ":" in var_expr:
                var_name, default_value = var_expr.split(":", 1)
                return os.environ.get(var_name, default_value)
            else:
                return os.environ.get(var_expr, config)
    return config


def save_default_config(config_path: Path) -> bool:
    """Write the default configuration unless the file already exists.

    Returns:
        True if the file was written
    """
    if config_path.exists():
        return False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    return True


def parse_config(raw_config: Dict[str, Any] | None) -> Settings:
    """Validate an already parsed configuration mapping."""
    config = expand_env_vars(raw_config or {})

    try:
        return Settings(**config)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def load_config(config_path: Path) -> Settings:
    """Load configuration from YAML file with environment variable expansion."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is not None and not isinstance(raw_config, dict):
        raise ValueError(f"Invalid configuration: expected a mapping in {config_path}")

    return parse_config(raw_config)
