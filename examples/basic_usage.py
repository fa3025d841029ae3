#!/usr/bin/env python3
"""Trigger a PagerDuty incident from the command line.

This demonstrates using the library directly:

* load the API token from `.env` / the environment
* build a trigger event with an optional link context
* print the classified response

The service key is passed as an argument (not read from `.env`).
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from pagerduty_events.config import PagerDutySettings
from pagerduty_events.integration import (
    BadRequest,
    EventsClient,
    LinkContext,
    Success,
    TriggerEvent,
)
from pagerduty_events.logging import configure_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trigger a PagerDuty incident (example).")
    parser.add_argument("--service-key", required=True, help="Generic API service key")
    parser.add_argument("--description", required=True, help="Short description of the problem")
    parser.add_argument("--incident-key", default=None, help="De-duplication key (optional)")
    parser.add_argument("--link", default=None, help="URL attached as a link context (optional)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = PagerDutySettings()
    configure_logging(settings.log_level)

    event = TriggerEvent(args.service_key, args.description).with_client("basic_usage.py")
    if args.incident_key:
        event = event.with_incident_key(args.incident_key)
    if args.link:
        event = event.add_context(LinkContext(args.link))

    with EventsClient.from_settings(settings) as client:
        response = client.trigger(event)

    if isinstance(response, Success):
        print(f"Triggered incident: {response.incident_key}")
        return 0
    if isinstance(response, BadRequest):
        print(f"Rejected: {response.message}: {', '.join(response.errors)}")
        return 1

    # Forbidden / InternalServerError: the caller owns the retry policy.
    print(f"PagerDuty asked us to retry later ({type(response).__name__})")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
