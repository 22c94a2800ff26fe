"""
HTTP client for scenarios, configured from the built run configuration.

Applies the run's timeouts, TLS verification, default headers and retry
policy to every request made against the API under test.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from reqres_automation.builder import PATHS
from reqres_automation.exceptions import ApiError
from reqres_automation.logging import get_named_logger

RetryCondition = Callable[[httpx.Response], bool]

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 429, 500, 502, 503, 504})


class ApiClient:
    """
    Synchronous client for the API under test.

    Named paths from the run configuration (``"PostUser"``, ``"GetUser"``...)
    may be passed wherever a request path is expected.
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout_ms: int,
        read_timeout_ms: int,
        verify_ssl: bool,
        retry_count: int,
        retry_interval_ms: int,
        paths: Mapping[str, str],
        headers: Mapping[str, str],
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Base URL of the API (e.g., "https://reqres.in")
            connect_timeout_ms: Connect timeout in milliseconds
            read_timeout_ms: Read timeout in milliseconds
            verify_ssl: Whether TLS certificates are verified
            retry_count: Total attempts per request
            retry_interval_ms: Pause between attempts in milliseconds
            paths: Logical operation names mapped to relative request paths
            headers: Headers sent with every request
        """
        self.base_url = base_url
        self.connect_timeout_ms = connect_timeout_ms
        self.read_timeout_ms = read_timeout_ms
        self.retry_count = retry_count
        self.retry_interval_ms = retry_interval_ms
        self.paths = dict(paths)

        self.client = httpx.Client(
            base_url=base_url,
            timeout=httpx.Timeout(read_timeout_ms / 1000, connect=connect_timeout_ms / 1000),
            verify=verify_ssl,
            headers=dict(headers),
        )

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> ApiClient:
        """
        Create a client from a built run configuration.

        Every name in PATHS present in the configuration becomes a named path.
        """
        paths = {name: config[name] for name in PATHS if name in config}
        headers: Mapping[str, str] = {}
        if "headers" in config:
            headers = config["headers"]

        return cls(
            base_url=config["api"],
            connect_timeout_ms=config["connectTimeout"],
            read_timeout_ms=config["readTimeout"],
            verify_ssl=config["ssl"],
            retry_count=config["retry"]["count"],
            retry_interval_ms=config["retry"]["interval"],
            paths=paths,
            headers=headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def resolve_path(self, path: str) -> str:
        """Map a named path to its relative URL; other values pass through."""
        if path in self.paths:
            return self.paths[path]
        return path

    def _should_retry(self, attempt: int) -> bool:
        return attempt < self.retry_count

    def _wait(self, path: str, attempt: int, reason: str) -> None:
        get_named_logger("client").warning(
            "Request not accepted, retrying",
            extra={
                "path": path,
                "attempt": attempt,
                "max_attempts": self.retry_count,
                "interval_ms": self.retry_interval_ms,
                "reason": reason,
            },
        )
        time.sleep(self.retry_interval_ms / 1000)

    def request(
        self,
        method: str,
        path: str,
        retry_until: RetryCondition | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Send a request, retrying per the configured policy.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Named path from the configuration or a relative path
            retry_until: Optional predicate the response must satisfy
            **kwargs: Additional arguments passed to httpx

        Returns:
            The final response. A response whose status is still transient
            after the last attempt is returned as-is.

        Raises:
            ApiError: Transport failure on every attempt, or retry_until
                never satisfied
        """
        url = self.resolve_path(path)
        response: httpx.Response | None = None

        for attempt in range(1, self.retry_count + 1):
            try:
                response = self.client.request(method, url, **kwargs)
            except httpx.TimeoutException as e:
                if self._should_retry(attempt):
                    self._wait(url, attempt, type(e).__name__)
                    continue
                raise ApiError(
                    error="request_timeout",
                    message=f"{method} {url} timed out",
                    details={
                        "path": url,
                        "attempts": attempt,
                        "read_timeout_ms": self.read_timeout_ms,
                    },
                ) from e
            except httpx.ConnectError as e:
                if self._should_retry(attempt):
                    self._wait(url, attempt, type(e).__name__)
                    continue
                raise ApiError(
                    error="connection_failed",
                    message=f"{self.base_url} is not responding",
                    details={"url": self.base_url, "path": url, "attempts": attempt},
                ) from e

            if response.status_code in RETRYABLE_STATUS_CODES:
                if self._should_retry(attempt):
                    self._wait(url, attempt, f"status {response.status_code}")
                    continue
                return response

            if retry_until is None or retry_until(response):
                return response

            if self._should_retry(attempt):
                self._wait(url, attempt, "condition not met")
                continue

            raise ApiError(
                error="retry_exhausted",
                message=f"too many retry attempts: {self.retry_count}",
                status_code=response.status_code,
                details={"path": url, "attempts": attempt},
            )

        # retry_count < 1 means no attempt was made
        raise ApiError(
            error="retry_exhausted",
            message=f"too many retry attempts: {self.retry_count}",
            details={"path": url, "attempts": 0},
        )

    def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> httpx.Response:
        return self.request("PUT", path, **kwargs)
