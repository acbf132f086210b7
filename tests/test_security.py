"""Tests for bearer token decoding."""

import time

import pytest
from jose import jwt as jose_jwt

from ecotrack.core.config import settings
from ecotrack.core.security import InvalidTokenError, decode_token, user_id_from_token

SECRET = "test-secret"


@pytest.fixture(autouse=True)
def no_configured_secret(monkeypatch):
    monkeypatch.setattr(settings, "JWT_SECRET", None)


def _encode(claims, secret=SECRET):
    return jose_jwt.encode(claims, secret, algorithm="HS256")


class TestDecodeToken:
    def test_verified_with_secret(self):
        payload = decode_token(_encode({"sub": "abc"}), secret=SECRET)
        assert payload["sub"] == "abc"

    def test_wrong_secret_raises(self):
        with pytest.raises(InvalidTokenError):
            decode_token(_encode({"sub": "abc"}, secret="other"), secret=SECRET)

    def test_expired_token_raises_with_secret(self):
        token = _encode({"sub": "abc", "exp": int(time.time()) - 60})
        with pytest.raises(InvalidTokenError, match="token_expired"):
            decode_token(token, secret=SECRET)

    def test_unverified_without_secret(self):
        token = _encode({"sub": "abc", "exp": int(time.time()) - 60}, secret="issued-elsewhere")
        assert decode_token(token)["sub"] == "abc"

    def test_garbage_raises(self):
        with pytest.raises(InvalidTokenError):
            decode_token("definitely.not.a-token")


class TestUserIdFromToken:
    def test_sub_claim(self):
        assert user_id_from_token(_encode({"sub": "42"})) == "42"

    def test_missing_sub_is_anonymous(self):
        assert user_id_from_token(_encode({"scope": "read"})) is None
