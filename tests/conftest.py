"""Global test configuration for ilert_api tests."""

from collections.abc import Callable, Generator
from typing import Any
from unittest.mock import MagicMock, patch

import httpx
import pytest

from ilert_api import IlertApi


@pytest.fixture
def mock_httpx_client() -> MagicMock:
    """Mock httpx.Client."""
    return MagicMock(spec=httpx.Client)


@pytest.fixture
def mock_httpx_client_cls(
    mock_httpx_client: MagicMock,
) -> Generator[MagicMock, None, None]:
    """Patch httpx.Client so no real connection is ever made."""
    with patch("ilert_api.client.httpx.Client") as mock_cls:
        mock_cls.return_value = mock_httpx_client
        yield mock_cls


@pytest.fixture
def ilert_api(mock_httpx_client_cls: MagicMock) -> IlertApi:
    """Create IlertApi instance with mocked httpx client."""
    return IlertApi(endpoint="https://api.ilert.example.com", api_token="test-token")


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Factory for httpx.Response objects with an optional JSON body."""

    def _make_response(status_code: int = 200, data: Any = None) -> httpx.Response:
        if data is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=data)

    return _make_response
