"""Configuration and client helpers for reqres.in API scenarios."""

from reqres_automation.builder import build_config
from reqres_automation.client import ApiClient
from reqres_automation.profiles import run_setup

__all__ = [
    "ApiClient",
    "build_config",
    "run_setup",
]
