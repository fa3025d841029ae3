"""Event payloads accepted by the PagerDuty integration API.

Monitoring systems emit events when problems are detected and when these problems
have been resolved. Incoming events are routed to a PagerDuty service and may result
in a new incident being created, or an existing incident being acknowledged or
resolved.

All payloads are immutable. The ``with_*`` setters and ``add_context`` return a new
instance, so they can be chained::

    event = (
        TriggerEvent("service key", "Disk full on db-1")
        .with_incident_key("db-1/disk")
        .add_context(LinkContext("https://grafana.example.com/d/db-1", text="dashboard"))
    )
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Literal

from pydantic_core import to_jsonable_python

from pagerduty_events.integration.responses import Response, classify_response
from pagerduty_events.request import Requestable

IncidentEventType = Literal["resolve", "acknowledge"]

_INCIDENT_EVENT_TYPES: frozenset[str] = frozenset({"resolve", "acknowledge"})


def _to_json_value(value: Any) -> Any:
    # Raises pydantic_core.PydanticSerializationError for values that cannot be encoded.
    return to_jsonable_python(value)


@dataclass(frozen=True, slots=True)
class ImageContext:
    """An image attached to the incident.

    Attributes:
        src: Source of the image. The image must be served via HTTPS.
        href: Optional link for the image.
        alt: Optional alternative text for the image.
    """

    src: str
    href: str | None = None
    alt: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"type": "image", "src": self.src}
        if self.href is not None:
            payload["href"] = self.href
        if self.alt is not None:
            payload["alt"] = self.alt
        return payload


@dataclass(frozen=True, slots=True)
class LinkContext:
    """A link attached to the incident, with optional descriptive text."""

    href: str
    text: str | None = None

    def to_dict(self) -> dict[str, str]:
        payload = {"type": "link", "href": self.href}
        if self.text is not None:
            payload["text"] = self.text
        return payload


Context = ImageContext | LinkContext


@dataclass(frozen=True, slots=True)
class TriggerEvent(Requestable[Response]):
    """Event to report a new or ongoing problem.

    When PagerDuty receives a trigger event, it will either open a new incident, or add
    a new trigger log entry to an existing incident, depending on the provided
    incident key.

    Attributes:
        service_key: The GUID of one of your "Generic API" services.
        description: A short description of the problem. It is used when generating
            phone calls, SMS messages and alert emails. The maximum length is 1024
            characters; longer values are rejected by PagerDuty, not here.
        incident_key: Identifies the incident to which this trigger should be applied.
            Events with the key of an open incident are appended to its log, which
            makes the key a "de-dup" handle for problem reports.
        client: Name of the monitoring client that is triggering this event.
        client_url: URL of the monitoring client that is triggering this event.
        details: JSON-compatible data included in the incident log.
        contexts: Images and links shown with the incident, in display order.
    """

    service_key: str
    description: str
    incident_key: str | None = None
    client: str | None = None
    client_url: str | None = None
    details: Any = None
    contexts: tuple[Context, ...] = ()

    @property
    def event_type(self) -> str:
        return "trigger"

    def with_incident_key(self, incident_key: str) -> TriggerEvent:
        return replace(self, incident_key=incident_key)

    def with_client(self, client: str) -> TriggerEvent:
        return replace(self, client=client)

    def with_client_url(self, client_url: str) -> TriggerEvent:
        return replace(self, client_url=client_url)

    def with_details(self, details: Any) -> TriggerEvent:
        """Attach arbitrary data to the event.

        Anything pydantic can serialize is accepted (dicts, dataclasses, models). The
        structure is not checked; a non-object value is rejected by PagerDuty with a
        ``BadRequest`` response.
        """

        return replace(self, details=_to_json_value(details))

    def add_context(self, context: Context) -> TriggerEvent:
        """Append an image or link to the incident's context list."""

        return replace(self, contexts=(*self.contexts, context))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "service_key": self.service_key,
            "event_type": self.event_type,
            "description": self.description,
        }
        if self.incident_key is not None:
            payload["incident_key"] = self.incident_key
        if self.client is not None:
            payload["client"] = self.client
        if self.client_url is not None:
            payload["client_url"] = self.client_url
        if self.details is not None:
            payload["details"] = self.details
        if self.contexts:
            payload["contexts"] = [context.to_dict() for context in self.contexts]
        return payload

    def method(self) -> str:
        return "POST"

    def body(self) -> str:
        return json.dumps(self.to_dict())

    def get_response(self, status: int, headers: dict[str, str], body: str) -> Response:
        return classify_response(status, headers, body)


@dataclass(frozen=True, slots=True)
class IncidentEvent(Requestable[Response]):
    """Event that moves an existing incident to another state.

    Resolve and acknowledge events share the same shape and differ only by
    ``event_type``:

    - ``resolve``: the incident enters the resolved state. It won't generate any
      additional notifications, and new triggers with the same incident key open a new
      incident instead.
    - ``acknowledge``: the incident enters the acknowledged state. It won't generate
      additional notifications, even if it receives new trigger events.

    ``incident_key`` should be the key received when the incident was opened. Events
    referencing resolved or nonexistent incidents are discarded by PagerDuty.
    """

    event_type: IncidentEventType
    service_key: str
    incident_key: str
    description: str | None = None
    details: Any = None

    def __post_init__(self) -> None:
        if self.event_type not in _INCIDENT_EVENT_TYPES:
            raise ValueError(
                f"event_type must be one of {sorted(_INCIDENT_EVENT_TYPES)}, "
                f"got {self.event_type!r}"
            )

    @classmethod
    def resolve(cls, service_key: str, incident_key: str) -> IncidentEvent:
        return cls(event_type="resolve", service_key=service_key, incident_key=incident_key)

    @classmethod
    def acknowledge(cls, service_key: str, incident_key: str) -> IncidentEvent:
        return cls(event_type="acknowledge", service_key=service_key, incident_key=incident_key)

    def with_description(self, description: str) -> IncidentEvent:
        """Set text that will appear in the incident's log for this event."""

        return replace(self, description=description)

    def with_details(self, details: Any) -> IncidentEvent:
        """Attach arbitrary data to the event (see ``TriggerEvent.with_details``)."""

        return replace(self, details=_to_json_value(details))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "service_key": self.service_key,
            "event_type": self.event_type,
            "incident_key": self.incident_key,
        }
        if self.description is not None:
            payload["description"] = self.description
        if self.details is not None:
            payload["details"] = self.details
        return payload

    def method(self) -> str:
        return "POST"

    def body(self) -> str:
        return json.dumps(self.to_dict())

    def get_response(self, status: int, headers: dict[str, str], body: str) -> Response:
        return classify_response(status, headers, body)
