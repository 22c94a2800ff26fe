"""Fixtures for unit tests."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import httpx
import pytest

if TYPE_CHECKING:
    from collections.abc import Generator

    from reqres_automation.client import ApiClient


@pytest.fixture
def mock_httpx_client() -> MagicMock:
    """Create a mock httpx.Client for testing client methods."""
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def mock_sleep() -> Generator[MagicMock, None, None]:
    """Replace the pause between retry attempts."""
    with patch("reqres_automation.client.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def api_client(mock_httpx_client: MagicMock) -> Generator[ApiClient, None, None]:
    """Create an ApiClient with a mocked httpx client and a short retry policy."""
    from reqres_automation.client import ApiClient  # noqa: PLC0415

    client = ApiClient(
        base_url="https://reqres.in",
        connect_timeout_ms=200000,
        read_timeout_ms=200000,
        verify_ssl=True,
        retry_count=3,
        retry_interval_ms=2000,
        paths={"PostUser": "/api/users", "GetUser": "/api/users?page=2"},
        headers={},
    )
    real_client = client.client
    # Replace the internal httpx client with our mock
    client.client = mock_httpx_client
    yield client
    real_client.close()
