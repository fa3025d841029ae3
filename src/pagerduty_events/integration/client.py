"""Send events to the PagerDuty integration API."""

from __future__ import annotations

import logging
from types import TracebackType

import requests

from pagerduty_events.auth import AuthToken
from pagerduty_events.config import PagerDutySettings
from pagerduty_events.integration.events import IncidentEvent, TriggerEvent
from pagerduty_events.integration.responses import Response
from pagerduty_events.request import perform

logger = logging.getLogger(__name__)


def _require_event_type(event: IncidentEvent, expected: str) -> None:
    if event.event_type != expected:
        raise ValueError(f"Expected a {expected!r} event, got {event.event_type!r}")


def trigger(
    auth: AuthToken, event: TriggerEvent, *, session: requests.Session | None = None
) -> Response:
    """Send a trigger event."""

    return perform(auth, event, session=session)


def resolve(
    auth: AuthToken, event: IncidentEvent, *, session: requests.Session | None = None
) -> Response:
    """Send a resolve event."""

    _require_event_type(event, "resolve")
    return perform(auth, event, session=session)


def acknowledge(
    auth: AuthToken, event: IncidentEvent, *, session: requests.Session | None = None
) -> Response:
    """Send an acknowledge event."""

    _require_event_type(event, "acknowledge")
    return perform(auth, event, session=session)


class EventsClient:
    """Holds a credential and an HTTP session shared by its calls.

    Each method still performs a single request and never retries. When no session is
    supplied, the client creates one and closes it in `close()`. A session passed in
    stays owned by the caller and is left open.
    """

    def __init__(self, auth: AuthToken, *, session: requests.Session | None = None) -> None:
        self._auth = auth
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @classmethod
    def from_settings(
        cls, settings: PagerDutySettings, *, session: requests.Session | None = None
    ) -> EventsClient:
        return cls(settings.auth(), session=session)

    def send(self, event: TriggerEvent | IncidentEvent) -> Response:
        """Send any event, dispatching on its ``event_type``."""

        if isinstance(event, TriggerEvent):
            return self.trigger(event)
        if event.event_type == "resolve":
            return self.resolve(event)
        return self.acknowledge(event)

    def trigger(self, event: TriggerEvent) -> Response:
        return trigger(self._auth, event, session=self._session)

    def resolve(self, event: IncidentEvent) -> Response:
        return resolve(self._auth, event, session=self._session)

    def acknowledge(self, event: IncidentEvent) -> Response:
        return acknowledge(self._auth, event, session=self._session)

    def close(self) -> None:
        """Close the session if this client created it."""

        if self._owns_session:
            self._session.close()
            logger.debug("PagerDuty session closed")

    def __enter__(self) -> EventsClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
