"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_API_BASE = "https://api.ticktick.com/api/v2"
DEFAULT_OAUTH_BASE = "https://ticktick.com"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    """Task service and identity settings.

    Nothing is validated here: a missing task service credential only
    surfaces when a request needs one.

    Attributes:
        api_token: Static TickTick API token.
        username: Account name for direct login / OAuth password grant.
        password: Account password.
        client_id: OAuth client id.
        client_secret: OAuth client secret.
        api_base: Base URL of the task REST API.
        oauth_base: Base URL hosting the OAuth token endpoint.
        timeout: Seconds before a remote call is abandoned.
        identity_secret: Key used to verify identity tokens.
        identity_bypass_token: Literal token accepted without verification
            outside production. Unset by default.
        app_env: Deployment environment name.
    """

    api_token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_base: str = DEFAULT_API_BASE
    oauth_base: str = DEFAULT_OAUTH_BASE
    timeout: float = DEFAULT_TIMEOUT
    identity_secret: Optional[str] = None
    identity_bypass_token: Optional[str] = None
    app_env: str = "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        timeout = os.getenv("TICKTICK_TIMEOUT")
        return cls(
            api_token=os.getenv("TICKTICK_API_TOKEN") or None,
            username=os.getenv("TICKTICK_USERNAME") or None,
            password=os.getenv("TICKTICK_PASSWORD") or None,
            client_id=os.getenv("TICKTICK_CLIENT_ID") or None,
            client_secret=os.getenv("TICKTICK_CLIENT_SECRET") or None,
            api_base=os.getenv("TICKTICK_API_BASE", DEFAULT_API_BASE).rstrip("/"),
            oauth_base=os.getenv("TICKTICK_OAUTH_BASE", DEFAULT_OAUTH_BASE).rstrip("/"),
            timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
            identity_secret=os.getenv("IDENTITY_SECRET") or None,
            identity_bypass_token=os.getenv("IDENTITY_BYPASS_TOKEN") or None,
            app_env=os.getenv("APP_ENV", "development").lower(),
        )

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def has_task_credentials(self) -> bool:
        """Whether any task service credential strategy has its inputs."""
        return bool(
            self.api_token
            or (self.username and self.password)
            or (self.client_id and self.client_secret)
        )
