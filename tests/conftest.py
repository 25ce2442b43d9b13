"""Pytest configuration and shared fixtures for all tests."""

from typing import Any, Optional
from unittest.mock import Mock

import pytest
import requests


def make_response(status_code: int = 200, json_data: Any = None, json_error: Optional[Exception] = None) -> Mock:
    """Build a mock requests.Response."""
    response = Mock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def mock_session():
    """Create a mock requests session."""
    return Mock(spec=requests.Session)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Keep the caller's environment out of option defaults."""
    monkeypatch.delenv("EOL_RATE_LIMIT", raising=False)
    monkeypatch.delenv("EOL_API_BASE_URL", raising=False)
