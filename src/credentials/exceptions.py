"""Exceptions for credential resolution and identity checks."""

from src.exceptions import TaggerError


class CredentialError(TaggerError):
    """Raised when no credential strategy can produce a usable credential."""

    status_code = 503

    def __init__(self, message: str, failures: list[tuple[str, str]] | None = None):
        self.failures = failures or []
        super().__init__(message)


class AuthError(TaggerError):
    """Raised when the identity provider or the task service rejects a credential."""

    status_code = 401

    def __init__(self, message: str, failures: list[tuple[str, str]] | None = None):
        self.failures = failures or []
        super().__init__(message)
