"""
Fixtures for reqres.in user scenarios.

Each scenario gets a freshly built configuration and a client configured
from it. The configuration comes from the run's own settings: API_CONFIG_PATH
(the project config.yaml when unset) and API_ENV, as set by the suite runner.

The reqres.in API is mocked at the HTTP level with respx, so the
scenarios exercise the real client and configuration without network access.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx

from reqres_automation.builder import build_config
from reqres_automation.client import ApiClient

if TYPE_CHECKING:
    from collections.abc import Generator, Iterator

PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config.yaml"
REQRES_URL = "https://reqres.in"
TIMESTAMP = "2026-10-17T10:00:00.000Z"

PAGE_TWO_USERS: dict[str, Any] = {
    "page": 2,
    "per_page": 6,
    "total": 12,
    "total_pages": 2,
    "data": [
        {
            "id": 7,
            "email": "michael.lawson@reqres.in",
            "first_name": "Michael",
            "last_name": "Lawson",
            "avatar": "https://reqres.in/img/faces/7-image.jpg",
        },
        {
            "id": 8,
            "email": "lindsay.ferguson@reqres.in",
            "first_name": "Lindsay",
            "last_name": "Ferguson",
            "avatar": "https://reqres.in/img/faces/8-image.jpg",
        },
    ],
}


def _create_user(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(201, json={**body, "id": "207", "createdAt": TIMESTAMP})


def _update_user(request: httpx.Request) -> httpx.Response:
    body = json.loads(request.content)
    return httpx.Response(200, json={**body, "updatedAt": TIMESTAMP})


@pytest.fixture(autouse=True)
def run_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fall back to the project settings file when no path was given."""
    if "API_CONFIG_PATH" not in os.environ:
        monkeypatch.setenv("API_CONFIG_PATH", str(PROJECT_CONFIG))


@pytest.fixture
def api_config() -> Mapping[str, Any]:
    """Configuration built the way every scenario receives it."""
    return build_config()


@pytest.fixture
def api_client(api_config: Mapping[str, Any]) -> Generator[ApiClient, None, None]:
    """Client configured from the scenario configuration."""
    with ApiClient.from_config(api_config) as client:
        yield client


@pytest.fixture
def mock_sleep() -> Generator[MagicMock, None, None]:
    """Skip the real pause between retry attempts."""
    with patch("reqres_automation.client.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def reqres_api() -> Iterator[respx.MockRouter]:
    """Mock the reqres.in user endpoints."""
    with respx.mock(base_url=REQRES_URL, assert_all_called=False) as router:
        router.post("/api/users", name="create_user").mock(side_effect=_create_user)
        router.get("/api/users", params={"page": "2"}, name="list_users").mock(
            return_value=httpx.Response(200, json=PAGE_TWO_USERS)
        )
        router.put("/api/users/2", name="update_user").mock(side_effect=_update_user)
        yield router
