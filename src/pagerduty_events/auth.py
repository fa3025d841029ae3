"""Credentials for the PagerDuty events API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthToken:
    """A token used to authorize requests to PagerDuty.

    No validation is performed on the token format. An invalid token is rejected
    remotely and surfaces as a ``Forbidden`` or ``BadRequest`` response.
    """

    raw_token: str

    def to_header(self) -> str:
        """Render the token as an ``Authorization`` header value."""

        return f"Token token={self.raw_token}"

    def __repr__(self) -> str:
        return "AuthToken(raw_token='***')"
