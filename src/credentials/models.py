"""Data models for the credentials module."""

from dataclasses import dataclass, field
from enum import Enum


class CredentialSource(Enum):
    """How a task service credential was obtained."""

    API_TOKEN = "api-token"
    DIRECT_LOGIN = "direct-login"
    OAUTH = "oauth"


@dataclass(frozen=True)
class Credential:
    """A bearer credential for the task service.

    Attributes:
        token: The opaque bearer value. Excluded from repr.
        source: Which strategy produced it.
    """

    token: str = field(repr=False)
    source: CredentialSource

    def authorization_header(self) -> dict[str, str]:
        """Build the Authorization header for a task service call."""
        return {"Authorization": f"Bearer {self.token}"}
