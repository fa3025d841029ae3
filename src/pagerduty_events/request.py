"""Request contract and executor for the PagerDuty events API.

Exactly one HTTP request is made per call. Nothing is retried here: PagerDuty asks
clients to retry on ``403`` and ``5xx`` responses and on network errors, preferably
with a back off, and that policy belongs to the caller.
"""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar

import requests

from pagerduty_events import __version__
from pagerduty_events.auth import AuthToken

logger = logging.getLogger(__name__)

EVENTS_API_URL = "https://events.pagerduty.com/generic/2010-04-15/create_event.json"
USER_AGENT = f"pagerduty-events/{__version__}"

ResponseT_co = TypeVar("ResponseT_co", covariant=True)


class PagerDutyError(Exception):
    """Base class for errors making a request and processing its response."""


class HttpError(PagerDutyError):
    """The HTTP request failed before a response was received (network errors included)."""


class ReadResponseError(PagerDutyError):
    """The response body could not be read from the transport."""


class DeserializeError(PagerDutyError):
    """The response body did not match the shape expected for its status code."""


class UnexpectedApiResponse(PagerDutyError):
    """The API answered with a status code outside the documented set."""

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"Unexpected API response: HTTP {status}")
        self.status = status
        self.body = body


class Requestable(Protocol[ResponseT_co]):
    """Things that can be sent to the PagerDuty API."""

    def url(self) -> str:
        return EVENTS_API_URL

    def headers(self) -> dict[str, str]:
        """Request-specific headers; the executor adds auth, user agent and content type."""

        return {}

    def method(self) -> str: ...

    def body(self) -> str: ...

    def get_response(
        self, status: int, headers: dict[str, str], body: str
    ) -> ResponseT_co: ...


def _send(
    session: requests.Session, auth: AuthToken, requestable: Requestable[ResponseT_co]
) -> ResponseT_co:
    headers = dict(requestable.headers())
    headers["Authorization"] = auth.to_header()
    headers["User-Agent"] = USER_AGENT
    headers["Content-Type"] = "application/json"

    method = requestable.method()
    url = requestable.url()
    logger.debug(
        "Sending PagerDuty request",
        extra={
            "method": method,
            "url": url,
            "event_type": getattr(requestable, "event_type", None),
        },
    )

    try:
        resp = session.request(
            method,
            url,
            data=requestable.body().encode("utf-8"),
            headers=headers,
            stream=True,
        )
    except requests.RequestException as exc:
        raise HttpError(f"Error making HTTP request: {exc}") from exc

    try:
        content = resp.content
    except (requests.RequestException, OSError) as exc:
        raise ReadResponseError(f"Error reading response body: {exc}") from exc
    finally:
        resp.close()

    # JSON from the events API is UTF-8 whatever charset the Content-Type declares.
    body = content.decode("utf-8", errors="replace")

    logger.debug("Received PagerDuty response", extra={"status": resp.status_code})
    return requestable.get_response(resp.status_code, dict(resp.headers), body)


def perform(
    auth: AuthToken,
    requestable: Requestable[ResponseT_co],
    *,
    session: requests.Session | None = None,
) -> ResponseT_co:
    """Send ``requestable`` and classify the response.

    Args:
        auth: Credential rendered into the ``Authorization`` header.
        requestable: The payload to send.
        session: Optional session to reuse. When omitted, a session is created for this
            call and closed afterwards.

    Raises:
        HttpError: The request could not be sent.
        ReadResponseError: The response body could not be read.
        DeserializeError: The body did not match the expected shape.
        UnexpectedApiResponse: The status code is not one the API documents.
    """

    if session is not None:
        return _send(session, auth, requestable)

    with requests.Session() as owned:
        return _send(owned, auth, requestable)
