"""Responses from the PagerDuty integration API.

| Result | Description                                                | Retry?                   |
|--------|------------------------------------------------------------|--------------------------|
| 200    | OK, the event has been accepted by PagerDuty.              | No                       |
| 400    | Bad Request, check that the JSON is valid.                 | No                       |
| 403    | Forbidden, too many API calls at a time.                   | Yes, after some time.    |
| 5xx    | Internal Server Error while processing the event.          | Yes, after some time.    |
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pagerduty_events.request import DeserializeError, UnexpectedApiResponse


class Success(BaseModel):
    """Returned with HTTP 200 when the event is well-formatted."""

    model_config = ConfigDict(frozen=True)

    status: str = Field(description='The string "success"')
    message: str = Field(description='Typically "Event processed"')
    incident_key: str = Field(description="Key of the incident affected by the request")


class BadRequest(BaseModel):
    """Returned with HTTP 400 when the event is invalid."""

    model_config = ConfigDict(frozen=True)

    status: str = Field(description='Typically "invalid event"')
    message: str = Field(description="A description of the problem")
    errors: list[str] = Field(description="Specific error messages")


@dataclass(frozen=True, slots=True)
class Forbidden:
    """HTTP 403: the service is rate limited. Retry later, with a back off."""


@dataclass(frozen=True, slots=True)
class InternalServerError:
    """HTTP 5xx: PagerDuty failed while processing the event. Retry later."""


Response = Success | BadRequest | Forbidden | InternalServerError


def classify_response(status: int, headers: dict[str, str], body: str) -> Response:
    """Map an HTTP status code and body onto a ``Response`` variant.

    Raises:
        DeserializeError: The body of a 200/400 response has the wrong shape.
        UnexpectedApiResponse: The status code is not documented by the API.
    """

    model: type[Success] | type[BadRequest]
    if status == 200:
        model = Success
    elif status == 400:
        model = BadRequest
    elif status == 403:
        return Forbidden()
    elif 500 <= status <= 599:
        return InternalServerError()
    else:
        raise UnexpectedApiResponse(status, body)

    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        raise DeserializeError(
            f"Error deserializing HTTP {status} response as {model.__name__}: {exc}"
        ) from exc
