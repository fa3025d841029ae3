"""Unofficial client for the PagerDuty events (integration) API.

Supported:
- trigger, acknowledge and resolve events, with image/link contexts
- typed classification of the API's responses

Each call makes exactly one HTTP request. Retrying on 403/5xx responses and network
errors is left to the caller.
"""

__version__ = "0.1.0"

from pagerduty_events.auth import AuthToken
from pagerduty_events.request import (
    DeserializeError,
    HttpError,
    PagerDutyError,
    ReadResponseError,
    UnexpectedApiResponse,
)

__all__ = [
    "__version__",
    "AuthToken",
    "DeserializeError",
    "HttpError",
    "PagerDutyError",
    "ReadResponseError",
    "UnexpectedApiResponse",
]
