"""
Settings file for scenario runs: log level and the environment profiles.

Nothing has a default; a run with an incomplete file stops before any
scenario starts.
"""

from __future__ import annotations

import os
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError


class Settings(BaseModel):
    """
    Parsed config.yaml.

    ``environments`` maps a profile name (dev, qa...) to the base
    configuration handed to the builder when that profile is selected.
    """

    model_config = ConfigDict(extra="forbid")

    log_level: str
    default_environment: str
    environments: dict[str, dict[str, Any]]


class ConfigurationError(Exception):
    """The settings file or the selected environment profile is unusable."""


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """
    Read the settings file holding the environment profiles.

    Args:
        config_path: Settings file, usually the project config.yaml

    Returns:
        Top-level mapping of the file

    Raises:
        ConfigurationError: File absent, empty, not YAML, or not a mapping
    """
    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}\n"
            f"Expected location: {config_path.absolute()}\n"
            f"Point API_CONFIG_PATH at a settings file or run from the project root."
        )

    try:
        with config_path.open() as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if config is None:
        raise ConfigurationError(
            f"Configuration file is empty: {config_path}\n"
            f"It must define log_level, default_environment and environments."
        )

    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Settings file must contain a YAML mapping, got {type(config).__name__}"
        )

    return config


def get_config_path() -> Path:
    """Settings file named by API_CONFIG_PATH, else config.yaml in the working directory."""
    config_path_str = os.environ.get("API_CONFIG_PATH")
    if config_path_str is None:
        config_path_str = "config.yaml"
    return Path(config_path_str)


@lru_cache
def get_settings() -> Settings:
    """
    Settings for this run, read on first use.

    Raises:
        ConfigurationError: Settings file unreadable or missing a field
    """
    config_path = get_config_path()
    yaml_config = load_yaml_config(config_path)

    try:
        return Settings(**yaml_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed: {e}\n"
            f"Settings have no defaults; every field must be present in the file."
        ) from e


def clear_settings_cache() -> None:
    """Forget the loaded settings so the next call rereads the file."""
    get_settings.cache_clear()


# Key fragments whose values stay out of logs (case-insensitive)
SENSITIVE_KEYWORDS: frozenset[str] = frozenset(
    {
        "key",
        "secret",
        "pass",
        "password",
        "token",
        "credential",
        "auth",
        "private",
        "bearer",
    }
)

_SENSITIVE_PATTERN = re.compile(
    r"(" + "|".join(re.escape(kw) for kw in SENSITIVE_KEYWORDS) + r")",
    re.IGNORECASE,
)

REDACTION_MARKER: str = "[REDACTED]"


def is_sensitive_key(key: str) -> bool:
    """Whether a configuration key looks like it holds a credential."""
    return bool(_SENSITIVE_PATTERN.search(key))


def redact_sensitive_values(
    data: Any,
    redaction_marker: str,
) -> dict[str, Any]:
    """
    Copy a run configuration with credential values masked, for logging.

    Frozen views from the builder are accepted; the copy is made of plain
    dicts and lists.
    """
    result: dict[str, Any] = {}

    for key, value in data.items():
        if is_sensitive_key(key):
            result[key] = redaction_marker
        elif hasattr(value, "items"):
            result[key] = redact_sensitive_values(value, redaction_marker)
        elif isinstance(value, (list, tuple)):
            result[key] = [
                redact_sensitive_values(item, redaction_marker)
                if hasattr(item, "items")
                else item
                for item in value
            ]
        else:
            result[key] = value

    return result
