"""Test configuration and fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from pagerduty_events.auth import AuthToken

SUCCESS_BODY = '{"status":"success","message":"Event processed","incident_key":"KEY123"}'


def _make_response(
    status: int, body: str = "", headers: dict[str, str] | None = None
) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.headers = CaseInsensitiveDict(headers or {"Content-Type": "application/json"})
    resp.encoding = get_encoding_from_headers(resp.headers)
    resp.raw = io.BytesIO(b"")
    resp._content = body.encode("utf-8")
    resp._content_consumed = True
    return resp


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Build a fully-read `requests.Response`."""
    return _make_response


@pytest.fixture
def auth() -> AuthToken:
    """Provide a test credential."""
    return AuthToken("test-token")


@pytest.fixture
def mock_session() -> Mock:
    """Provide a session whose requests answer 200 with a success body."""
    session = Mock(spec=requests.Session)
    session.request.return_value = _make_response(200, SUCCESS_BODY)
    return session
