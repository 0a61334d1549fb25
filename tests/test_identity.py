"""Unit tests for identity token verification."""

import time

import jwt
import pytest

from src.config import Settings
from src.credentials import AuthError
from src.identity import IdentityVerifier, Principal

SECRET = "test-identity-secret-0123456789abcdef"


def _token(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode(claims, secret, algorithm="HS256")


class TestVerify:
    """Tests for IdentityVerifier.verify()."""

    def test_valid_token(self):
        principal = IdentityVerifier(SECRET).verify(_token({"sub": "user_1", "sid": "sess_1"}))
        assert isinstance(principal, Principal)
        assert principal.subject == "user_1"
        assert principal.session_id == "sess_1"
        assert principal.claims["sub"] == "user_1"

    def test_missing_token(self):
        with pytest.raises(AuthError, match="No authorization token"):
            IdentityVerifier(SECRET).verify(None)

    def test_wrong_secret(self):
        token = _token({"sub": "user_1"}, secret="another-secret-0123456789abcdefgh")
        with pytest.raises(AuthError):
            IdentityVerifier(SECRET).verify(token)

    def test_expired(self):
        token = _token({"sub": "user_1", "exp": int(time.time()) - 60})
        with pytest.raises(AuthError):
            IdentityVerifier(SECRET).verify(token)

    def test_subject_required(self):
        with pytest.raises(AuthError):
            IdentityVerifier(SECRET).verify(_token({"sid": "sess_1"}))

    def test_garbage(self):
        with pytest.raises(AuthError):
            IdentityVerifier(SECRET).verify("not-a-jwt")

    def test_no_secret_configured(self):
        verifier = IdentityVerifier(None)
        assert not verifier.configured
        with pytest.raises(AuthError, match="not configured"):
            verifier.verify(_token({"sub": "user_1"}))


class TestVerifyHeader:
    def test_bearer_header(self):
        header = f"Bearer {_token({'sub': 'user_1'})}"
        assert IdentityVerifier(SECRET).verify_header(header).subject == "user_1"

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "bearer abc"])
    def test_rejects_non_bearer(self, header):
        with pytest.raises(AuthError):
            IdentityVerifier(SECRET).verify_header(header)


class TestBypassToken:
    """The bypass token only works when explicitly allowed."""

    def test_disallowed_by_default(self):
        verifier = IdentityVerifier(SECRET, bypass_token="dev-bypass")
        with pytest.raises(AuthError):
            verifier.verify("dev-bypass")

    def test_allowed(self):
        verifier = IdentityVerifier(SECRET, bypass_token="dev-bypass", allow_bypass=True)
        assert verifier.verify("dev-bypass").subject == IdentityVerifier.BYPASS_SUBJECT

    def test_allowed_without_secret(self):
        verifier = IdentityVerifier(None, bypass_token="dev-bypass", allow_bypass=True)
        assert verifier.verify("dev-bypass").subject == "bypass"

    def test_other_tokens_still_verified(self):
        verifier = IdentityVerifier(SECRET, bypass_token="dev-bypass", allow_bypass=True)
        with pytest.raises(AuthError):
            verifier.verify("dev-bypass-2")

    def test_from_settings_development(self):
        settings = Settings(identity_secret=SECRET, identity_bypass_token="dev-bypass")
        assert IdentityVerifier.from_settings(settings).verify("dev-bypass").subject == "bypass"

    def test_from_settings_production_ignores_bypass(self, caplog):
        settings = Settings(
            identity_secret=SECRET,
            identity_bypass_token="dev-bypass",
            app_env="production",
        )
        verifier = IdentityVerifier.from_settings(settings)
        assert "ignored" in caplog.text
        with pytest.raises(AuthError):
            verifier.verify("dev-bypass")
