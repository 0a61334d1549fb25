"""Identity token verification for operator requests."""

import hmac
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import jwt

from src.config import Settings
from src.credentials import AuthError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Principal:
    """The verified operator behind a request.

    Attributes:
        subject: User id from the token's ``sub`` claim.
        session_id: Identity provider session id (``sid`` claim), if any.
        claims: All decoded claims.
    """

    subject: str
    session_id: Optional[str] = None
    claims: dict[str, Any] = field(default_factory=dict)


class IdentityVerifier:
    """Verifies HS256 identity tokens signed with the identity secret.

    A literal bypass token can be configured for local development. It is
    honoured only when ``allow_bypass`` is set; ``from_settings`` sets it
    outside production only.
    """

    ALGORITHMS = ["HS256"]
    BYPASS_SUBJECT = "bypass"

    def __init__(
        self,
        secret: Optional[str],
        bypass_token: Optional[str] = None,
        allow_bypass: bool = False,
    ):
        self._secret = secret
        self._bypass_token = bypass_token if allow_bypass else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityVerifier":
        allow_bypass = not settings.is_production
        if settings.identity_bypass_token and not allow_bypass:
            logger.warning("IDENTITY_BYPASS_TOKEN is set in production and will be ignored")
        return cls(
            settings.identity_secret,
            bypass_token=settings.identity_bypass_token,
            allow_bypass=allow_bypass,
        )

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def verify(self, token: Optional[str]) -> Principal:
        """Verify an identity token.

        Raises:
            AuthError: Token absent, invalid or expired, or no secret configured.
        """
        if not token:
            raise AuthError("No authorization token provided")

        if self._bypass_token and hmac.compare_digest(token.encode(), self._bypass_token.encode()):
            logger.warning("Identity bypass token accepted")
            return Principal(subject=self.BYPASS_SUBJECT)

        if not self._secret:
            raise AuthError("Identity verification is not configured")

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=self.ALGORITHMS,
                options={"require": ["sub"]},
            )
        except jwt.InvalidTokenError as e:
            logger.info("Identity token rejected: %s", e)
            raise AuthError("Authentication failed") from e

        return Principal(subject=str(claims["sub"]), session_id=claims.get("sid"), claims=claims)

    def verify_header(self, authorization: Optional[str]) -> Principal:
        """Verify the token in an ``Authorization: Bearer <token>`` header."""
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthError("No authorization token provided")
        return self.verify(authorization[len(BEARER_PREFIX):].strip())
