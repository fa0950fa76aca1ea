"""
Password hashing and JWT helpers.
"""

from datetime import timedelta

import pytest
from jose import jwt

from japama.config import settings
from japama.core.exceptions import (
    AuthenticationException,
    DependencyException,
    ErrorCode,
    ValidationException,
)
from japama.core.security import hash_password, verify_password
from japama.core.tokens import (
    create_session_token,
    create_verification_token,
    decode_session_token,
    decode_verification_token,
)


class TestPasswords:
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("secret1")
        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_same_password_gets_different_salts(self):
        assert hash_password("secret1") != hash_password("secret1")

    def test_verify_roundtrip(self):
        hashed = hash_password("secret1")
        assert verify_password("secret1", hashed) is True
        assert verify_password("secret2", hashed) is False

    def test_overlong_password_never_matches(self):
        hashed = hash_password("secret1")
        assert verify_password("x" * 100, hashed) is False
        assert verify_password("secret1" + "x" * 80, hashed) is False

    def test_malformed_hash_is_a_dependency_failure(self):
        with pytest.raises(DependencyException):
            verify_password("secret1", "not-a-bcrypt-hash")


class TestSessionTokens:
    def test_roundtrip(self):
        claims = decode_session_token(create_session_token(7, "cobrador"))
        assert claims.user_id == 7
        assert claims.role == "cobrador"

    def test_default_lifetime_is_seven_days(self):
        token = create_session_token(7, "admin")
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["exp"] - payload["iat"] == int(timedelta(days=7).total_seconds())
        assert payload["type"] == "access"
        assert payload["sub"] == "7"

    def test_expired(self):
        token = create_session_token(7, "admin", expires_delta=timedelta(seconds=-5))
        with pytest.raises(AuthenticationException) as exc_info:
            decode_session_token(token)
        assert exc_info.value.code == ErrorCode.INVALID_SESSION

    def test_wrong_key(self):
        token = jwt.encode({"sub": "7", "role": "admin", "type": "access"}, "other-key")
        with pytest.raises(AuthenticationException):
            decode_session_token(token)

    def test_unknown_role_claim(self):
        token = jwt.encode(
            {"sub": "7", "role": "root", "type": "access"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationException):
            decode_session_token(token)

    def test_verification_token_rejected(self):
        with pytest.raises(AuthenticationException):
            decode_session_token(create_verification_token(7, "a@b.com"))


class TestVerificationTokens:
    def test_roundtrip(self):
        claims = decode_verification_token(create_verification_token(3, "a@b.com"))
        assert claims.user_id == 3
        assert claims.email == "a@b.com"

    def test_default_lifetime_is_24_hours(self):
        token = create_verification_token(3, "a@b.com")
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["exp"] - payload["iat"] == 24 * 3600
        assert payload["purpose"] == "email-verification"

    def test_expired_is_reported_separately(self):
        token = create_verification_token(3, "a@b.com", expires_delta=timedelta(seconds=-5))
        with pytest.raises(ValidationException) as exc_info:
            decode_verification_token(token)
        assert exc_info.value.code == ErrorCode.TOKEN_EXPIRED

    def test_session_token_rejected(self):
        with pytest.raises(ValidationException) as exc_info:
            decode_verification_token(create_session_token(3, "admin"))
        assert exc_info.value.code == ErrorCode.INVALID_TOKEN
