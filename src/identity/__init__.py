"""Operator identity verification."""

from .verifier import IdentityVerifier, Principal

__all__ = ["IdentityVerifier", "Principal"]
