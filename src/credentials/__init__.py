"""Task service credential resolution.

Resolves a bearer credential from the first configured strategy (static
API token, direct login, OAuth) and caches it for the task service client.
"""

from .exceptions import AuthError, CredentialError
from .models import Credential, CredentialSource
from .resolver import CredentialCache, CredentialResolver
from .strategies import (
    ApiTokenStrategy,
    CredentialStrategy,
    DirectLoginStrategy,
    OAuthStrategy,
    default_strategies,
)

__all__ = [
    # Resolution
    "CredentialResolver",
    "CredentialCache",
    # Strategies
    "CredentialStrategy",
    "ApiTokenStrategy",
    "DirectLoginStrategy",
    "OAuthStrategy",
    "default_strategies",
    # Models
    "Credential",
    "CredentialSource",
    # Exceptions
    "CredentialError",
    "AuthError",
]
