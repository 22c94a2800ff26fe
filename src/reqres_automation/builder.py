"""
Configuration builder for reqres.in scenarios.

Produces the read-only mapping every scenario consumes: framework options
(timeouts, TLS, retry policy), the base URL and the named request paths,
layered over the base configuration returned by the setup routine.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from reqres_automation.config import REDACTION_MARKER, redact_sensitive_values
from reqres_automation.logging import get_named_logger
from reqres_automation.profiles import run_setup

SetupProcedure = Callable[[], Mapping[str, Any]]

# Generous timeouts (milliseconds) for slow backends
CONNECT_TIMEOUT_MS = 200000
READ_TIMEOUT_MS = 200000
SSL_ENABLED = True
RETRY_COUNT = 100
RETRY_INTERVAL_MS = 2000

ENDPOINTS: Mapping[str, str] = MappingProxyType(
    {
        "api": "https://reqres.in",
    }
)

PATHS: Mapping[str, str] = MappingProxyType(
    {
        "PostUser": "/api/users",
        "GetUser": "/api/users?page=2",
        "PutUser": "/api/users/2?",
    }
)


def framework_options() -> dict[str, Any]:
    """Network and retry options applied to every request of a run."""
    return {
        "connectTimeout": CONNECT_TIMEOUT_MS,
        "readTimeout": READ_TIMEOUT_MS,
        "ssl": SSL_ENABLED,
        "retry": {"count": RETRY_COUNT, "interval": RETRY_INTERVAL_MS},
    }


def freeze(value: Any) -> Any:
    """Recursively convert mappings to read-only views and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def build_config(setup: SetupProcedure = run_setup) -> Mapping[str, Any]:
    """
    Build the configuration for a test run.

    Local keys override same-named keys from the base configuration.
    Errors raised by ``setup`` propagate unchanged.

    Args:
        setup: Zero-argument callable returning the base configuration

    Returns:
        Read-only configuration mapping
    """
    config: dict[str, Any] = dict(setup())
    config.update(framework_options())
    config.update(ENDPOINTS)
    config.update(PATHS)

    get_named_logger("builder").debug(
        "Built test configuration",
        extra={"config": redact_sensitive_values(config, REDACTION_MARKER)},
    )
    return freeze(config)
