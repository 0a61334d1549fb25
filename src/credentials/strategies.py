"""Credential strategies for the task service.

Each strategy knows whether its configuration inputs are present and how
to turn them into a ``Credential``. The resolver tries them in order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests
from oauthlib.oauth2 import (
    BackendApplicationClient,
    LegacyApplicationClient,
    OAuth2Error,
)
from requests_oauthlib import OAuth2Session

from src.config import Settings
from src.exceptions import RemoteError

from .exceptions import AuthError, CredentialError
from .models import Credential, CredentialSource

logger = logging.getLogger(__name__)

LOGIN_PATH = "/user/signon"
OAUTH_TOKEN_PATH = "/oauth/token"


class CredentialStrategy(ABC):
    """A single way of obtaining a task service credential.

    To add a strategy:
    1. Subclass CredentialStrategy
    2. Implement name, is_configured() and attempt()
    3. Raise AuthError when the service rejects the inputs, RemoteError on
       transport failures and CredentialError for unusable responses
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short strategy name used in diagnostics."""
        pass

    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the configuration holds every input this strategy needs."""
        pass

    @abstractmethod
    def attempt(self) -> Credential:
        """Try to obtain a credential.

        Raises:
            AuthError: The service rejected the configured inputs.
            RemoteError: The exchange failed in transit.
            CredentialError: The response held no usable credential.
        """
        pass


class ApiTokenStrategy(CredentialStrategy):
    """Uses a static API token verbatim, without any network call."""

    def __init__(self, api_token: Optional[str]):
        self._api_token = api_token

    @property
    def name(self) -> str:
        return CredentialSource.API_TOKEN.value

    def is_configured(self) -> bool:
        return bool(self._api_token)

    def attempt(self) -> Credential:
        if not self._api_token:
            raise CredentialError("API token not configured")
        return Credential(token=self._api_token, source=CredentialSource.API_TOKEN)


class DirectLoginStrategy(CredentialStrategy):
    """Logs in with username and password and keeps the session token.

    The token is read from the response body first, then from the
    ``X-Auth-Token`` header, then from the ``t`` cookie.
    """

    BODY_KEYS = ("token", "access_token")
    TOKEN_HEADER = "X-Auth-Token"
    TOKEN_COOKIE = "t"

    def __init__(
        self,
        username: Optional[str],
        password: Optional[str],
        api_base: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self._username = username
        self._password = password
        self._login_url = f"{api_base}{LOGIN_PATH}"
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def name(self) -> str:
        return CredentialSource.DIRECT_LOGIN.value

    def is_configured(self) -> bool:
        return bool(self._username and self._password)

    def attempt(self) -> Credential:
        try:
            response = self._session.post(
                self._login_url,
                json={"username": self._username, "password": self._password},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise RemoteError(f"Login request failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthError(f"Login rejected (status={response.status_code})")
        if not response.ok:
            raise RemoteError(
                f"Login failed (status={response.status_code})",
                status_code=response.status_code,
            )

        token = self._extract_token(response)
        if not token:
            raise CredentialError("Login response carried no session token")
        logger.debug("Direct login produced a session token")
        return Credential(token=token, source=CredentialSource.DIRECT_LOGIN)

    def _extract_token(self, response: requests.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in self.BODY_KEYS:
                if body.get(key):
                    return body[key]
        return response.headers.get(self.TOKEN_HEADER) or response.cookies.get(
            self.TOKEN_COOKIE
        )


class OAuthStrategy(CredentialStrategy):
    """Exchanges OAuth client credentials for a bearer token.

    Uses the resource owner password grant when a username and password
    are configured alongside the client, the client-credentials grant
    otherwise.
    """

    def __init__(
        self,
        client_id: Optional[str],
        client_secret: Optional[str],
        oauth_base: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._token_url = f"{oauth_base}{OAUTH_TOKEN_PATH}"
        self._username = username
        self._password = password
        self._timeout = timeout

    @property
    def name(self) -> str:
        return CredentialSource.OAUTH.value

    def is_configured(self) -> bool:
        return bool(self._client_id and self._client_secret)

    def attempt(self) -> Credential:
        password_grant = bool(self._username and self._password)
        if password_grant:
            client = LegacyApplicationClient(client_id=self._client_id)
            extra = {"username": self._username, "password": self._password}
        else:
            client = BackendApplicationClient(client_id=self._client_id)
            extra = {}

        oauth = OAuth2Session(client=client)
        try:
            token = oauth.fetch_token(
                token_url=self._token_url,
                client_id=self._client_id,
                client_secret=self._client_secret,
                timeout=self._timeout,
                **extra,
            )
        except OAuth2Error as e:
            raise AuthError(f"OAuth token exchange rejected: {e.description or e.error}") from e
        except requests.RequestException as e:
            raise RemoteError(f"OAuth token request failed: {e}") from e

        access_token = token.get("access_token")
        if not access_token:
            raise CredentialError("OAuth response carried no access token")
        logger.debug(
            "OAuth %s grant produced a bearer token",
            "password" if password_grant else "client-credentials",
        )
        return Credential(token=access_token, source=CredentialSource.OAUTH)


def default_strategies(
    settings: Settings, session: Optional[requests.Session] = None
) -> list[CredentialStrategy]:
    """Build the strategies in priority order: token, direct login, OAuth."""
    return [
        ApiTokenStrategy(settings.api_token),
        DirectLoginStrategy(
            settings.username,
            settings.password,
            settings.api_base,
            timeout=settings.timeout,
            session=session,
        ),
        OAuthStrategy(
            settings.client_id,
            settings.client_secret,
            settings.oauth_base,
            username=settings.username,
            password=settings.password,
            timeout=settings.timeout,
        ),
    ]
