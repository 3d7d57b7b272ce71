"""Tests for the signing key and token helpers"""

import pytest

from ideaboard.core import security


class TestSecretKey:

    def test_missing_key_refuses_to_start(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)

        with pytest.raises(RuntimeError) as exc_info:
            security.load_secret_key()

        assert "SECRET_KEY" in str(exc_info.value)

    def test_empty_key_refuses_to_start(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "")

        with pytest.raises(RuntimeError):
            security.load_secret_key()

    def test_key_comes_from_environment(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "from-the-environment")
        assert security.load_secret_key() == "from-the-environment"


class TestTokens:

    def test_round_trip_subject(self):
        token = security.create_access_token({"sub": "ada@example.com"})
        assert security.decode_access_token(token) == "ada@example.com"

    def test_token_signed_with_another_key_is_rejected(self):
        from jose import jwt

        forged = jwt.encode({"sub": "admin@example.com"}, "some-other-key", algorithm=security.ALGORITHM)

        assert security.decode_access_token(forged) is None
