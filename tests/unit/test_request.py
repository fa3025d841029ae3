"""Unit tests for the request executor (mocked transport)."""

from __future__ import annotations

import json
from unittest.mock import Mock

import pytest
import requests

import pagerduty_events
from pagerduty_events import request as request_module
from pagerduty_events.auth import AuthToken
from pagerduty_events.integration.events import IncidentEvent, TriggerEvent
from pagerduty_events.integration.responses import Forbidden, Success
from pagerduty_events.request import (
    EVENTS_API_URL,
    USER_AGENT,
    DeserializeError,
    HttpError,
    ReadResponseError,
    UnexpectedApiResponse,
    perform,
)


def test_perform_sends_single_post(auth: AuthToken, mock_session: Mock) -> None:
    event = TriggerEvent("the service key", "Houston, we have a problem")

    response = perform(auth, event, session=mock_session)

    assert response == Success(status="success", message="Event processed", incident_key="KEY123")
    mock_session.request.assert_called_once()
    args, kwargs = mock_session.request.call_args
    assert args == ("POST", EVENTS_API_URL)
    assert json.loads(kwargs["data"]) == event.to_dict()
    assert kwargs["headers"] == {
        "Authorization": "Token token=test-token",
        "User-Agent": USER_AGENT,
        "Content-Type": "application/json",
    }


def test_perform_merges_request_headers(auth: AuthToken, mock_session: Mock) -> None:
    class TracedEvent(TriggerEvent):
        def headers(self) -> dict[str, str]:
            return {"X-Trace": "abc", "Content-Type": "text/plain"}

    perform(auth, TracedEvent("key", "problem"), session=mock_session)

    headers = mock_session.request.call_args.kwargs["headers"]
    assert headers["X-Trace"] == "abc"
    assert headers["Content-Type"] == "application/json"


def test_perform_classifies_response(auth: AuthToken, mock_session: Mock, make_response) -> None:
    mock_session.request.return_value = make_response(403, "")

    assert perform(auth, IncidentEvent.resolve("key", "KEY"), session=mock_session) == Forbidden()


def test_perform_wraps_transport_errors(auth: AuthToken, mock_session: Mock) -> None:
    mock_session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(HttpError) as exc_info:
        perform(auth, TriggerEvent("key", "problem"), session=mock_session)

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


def test_perform_wraps_body_read_errors(auth: AuthToken, mock_session: Mock) -> None:
    resp = requests.Response()
    resp.status_code = 200
    resp.raw = Mock()
    resp.raw.stream.side_effect = requests.exceptions.ChunkedEncodingError("connection reset")
    mock_session.request.return_value = resp

    with pytest.raises(ReadResponseError):
        perform(auth, TriggerEvent("key", "problem"), session=mock_session)

    resp.raw.close.assert_called_once()


def test_perform_surfaces_decode_errors(auth: AuthToken, mock_session: Mock, make_response) -> None:
    mock_session.request.return_value = make_response(200, "not json")

    with pytest.raises(DeserializeError):
        perform(auth, TriggerEvent("key", "problem"), session=mock_session)


def test_perform_surfaces_unexpected_status(
    auth: AuthToken, mock_session: Mock, make_response
) -> None:
    mock_session.request.return_value = make_response(418, "teapot")

    with pytest.raises(UnexpectedApiResponse):
        perform(auth, TriggerEvent("key", "problem"), session=mock_session)

    assert mock_session.request.call_count == 1


def test_perform_creates_and_closes_session_per_call(
    auth: AuthToken, mock_session: Mock, monkeypatch: pytest.MonkeyPatch
) -> None:
    mock_session.__enter__ = Mock(return_value=mock_session)
    mock_session.__exit__ = Mock(return_value=None)
    factory = Mock(return_value=mock_session)
    monkeypatch.setattr(request_module.requests, "Session", factory)

    perform(auth, TriggerEvent("key", "problem"))

    factory.assert_called_once_with()
    mock_session.__exit__.assert_called_once()


def test_perform_decodes_charsetless_text_body_as_utf8(
    auth: AuthToken, mock_session: Mock, make_response
) -> None:
    body = '{"status":"success","message":"Event processed","incident_key":"café"}'
    mock_session.request.return_value = make_response(
        200, body, headers={"Content-Type": "text/plain"}
    )

    response = perform(auth, TriggerEvent("key", "problem"), session=mock_session)

    assert isinstance(response, Success)
    assert response.incident_key == "café"


def test_perform_ignores_unknown_declared_charset(
    auth: AuthToken, mock_session: Mock, make_response
) -> None:
    mock_session.request.return_value = make_response(
        403, "<html>slow down</html>", headers={"Content-Type": "text/html; charset=x-bogus"}
    )

    assert perform(auth, TriggerEvent("key", "problem"), session=mock_session) == Forbidden()


def test_user_agent_tracks_package_version() -> None:
    assert USER_AGENT == f"pagerduty-events/{pagerduty_events.__version__}"
