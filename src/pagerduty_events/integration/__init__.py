"""PagerDuty integration (events) API."""

from pagerduty_events.integration.client import EventsClient, acknowledge, resolve, trigger
from pagerduty_events.integration.events import (
    Context,
    ImageContext,
    IncidentEvent,
    LinkContext,
    TriggerEvent,
)
from pagerduty_events.integration.responses import (
    BadRequest,
    Forbidden,
    InternalServerError,
    Response,
    Success,
    classify_response,
)

__all__ = [
    "BadRequest",
    "Context",
    "EventsClient",
    "Forbidden",
    "ImageContext",
    "IncidentEvent",
    "InternalServerError",
    "LinkContext",
    "Response",
    "Success",
    "TriggerEvent",
    "acknowledge",
    "classify_response",
    "resolve",
    "trigger",
]
