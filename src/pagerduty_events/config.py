"""Optional settings for applications that send PagerDuty events.

The library never reads configuration on its own. Applications may load it from:
- environment variables
- and a local `.env` file (if present)

Environment variables:
- PAGERDUTY_AUTH_TOKEN
- LOG_LEVEL  (optional)

Pydantic-settings supports overriding the env file in tests via
`PagerDutySettings(_env_file=path_to_env)`.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pagerduty_events.auth import AuthToken


class PagerDutySettings(BaseSettings):
    """Settings for sending events to PagerDuty."""

    auth_token: str = Field(
        default="",
        validation_alias="PAGERDUTY_AUTH_TOKEN",
        description="API token sent in the Authorization header",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_auth_token(self) -> PagerDutySettings:
        if not self.auth_token.strip():
            raise ValueError("PAGERDUTY_AUTH_TOKEN is required")
        return self

    def auth(self) -> AuthToken:
        return AuthToken(self.auth_token)
