"""
Shared setup routine producing the base configuration for a run.

The base configuration is the environment profile selected by ``API_ENV``
(or the settings' ``default_environment``). It is loaded once per process;
every caller receives its own deep copy so builders can merge into it freely.
"""

from __future__ import annotations

import copy
import os
from functools import lru_cache
from typing import Any

from reqres_automation.config import ConfigurationError, get_settings
from reqres_automation.logging import get_named_logger

ENV_VAR_NAME = "API_ENV"


def get_environment_name() -> str:
    """
    Resolve the environment to run against.

    Returns:
        Value of API_ENV if set and non-empty, else the configured default
    """
    env_name = os.environ.get(ENV_VAR_NAME)
    if not env_name:
        env_name = get_settings().default_environment
    return env_name


@lru_cache
def _load_base_config(env_name: str) -> dict[str, Any]:
    settings = get_settings()
    if env_name not in settings.environments:
        raise ConfigurationError(
            f"Unknown environment: {env_name!r}\n"
            f"Known environments: {sorted(settings.environments)}"
        )

    get_named_logger("profiles").info(
        "Loaded environment profile",
        extra={"env": env_name, "keys": sorted(settings.environments[env_name])},
    )
    return {"env": env_name, **settings.environments[env_name]}


def run_setup() -> dict[str, Any]:
    """
    Return the base configuration for the selected environment.

    Returns:
        Fresh copy of the environment profile, with an ``env`` key naming it

    Raises:
        ConfigurationError: Settings are invalid or the environment is unknown
    """
    return copy.deepcopy(_load_base_config(get_environment_name()))


def clear_setup_cache() -> None:
    """Forget the loaded profile. Used in testing."""
    _load_base_config.cache_clear()
