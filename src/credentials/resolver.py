"""Credential resolution and caching for the task service."""

import logging
from typing import Optional, Sequence

from src.exceptions import TaggerError

from .exceptions import AuthError, CredentialError
from .models import Credential
from .strategies import CredentialStrategy

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Tries credential strategies in priority order.

    Unconfigured strategies are skipped. The first strategy that produces
    a credential wins; failures of earlier strategies are kept for the
    error raised when none succeeds.
    """

    def __init__(self, strategies: Sequence[CredentialStrategy]):
        self._strategies = list(strategies)

    @property
    def configured_strategies(self) -> list[str]:
        """Names of the strategies whose inputs are present."""
        return [s.name for s in self._strategies if s.is_configured()]

    def resolve(self) -> Credential:
        """Resolve a credential from the first viable strategy.

        Returns:
            The resolved Credential.

        Raises:
            CredentialError: No strategy is configured, or every configured
                strategy failed without a credential rejection.
            AuthError: Every configured strategy failed and at least one was
                rejected by the service.
        """
        failures: list[tuple[str, str]] = []
        rejected = False

        for strategy in self._strategies:
            if not strategy.is_configured():
                continue
            try:
                credential = strategy.attempt()
            except TaggerError as e:
                logger.warning("Credential strategy '%s' failed: %s", strategy.name, e)
                failures.append((strategy.name, str(e)))
                rejected = rejected or isinstance(e, AuthError)
                continue
            logger.info("Resolved task service credential via %s", strategy.name)
            return credential

        if not failures:
            raise CredentialError("no credentials configured")

        summary = "; ".join(f"{name}: {msg}" for name, msg in failures)
        if rejected:
            raise AuthError(f"All credential strategies failed ({summary})", failures)
        raise CredentialError(f"All credential strategies failed ({summary})", failures)


class CredentialCache:
    """Holds the resolved credential for one task service client.

    There is no lock. Two callers that both see a stale credential may
    both re-resolve; acquiring a credential twice is harmless.
    """

    def __init__(self, resolver: CredentialResolver):
        self._resolver = resolver
        self._credential: Optional[Credential] = None

    @property
    def resolver(self) -> CredentialResolver:
        return self._resolver

    @property
    def cached(self) -> Optional[Credential]:
        return self._credential

    def get(self) -> Credential:
        """Return the cached credential, resolving it on first use."""
        if self._credential is None:
            self._credential = self._resolver.resolve()
        return self._credential

    def invalidate(self) -> None:
        """Drop the cached credential so the next get() resolves again."""
        if self._credential is not None:
            logger.info(
                "Invalidating %s credential after rejection", self._credential.source.value
            )
        self._credential = None

    def refresh(self) -> Credential:
        """Invalidate and resolve again."""
        self.invalidate()
        return self.get()
