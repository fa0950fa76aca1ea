"""
Signed JWTs: session tokens and email-verification tokens.

Both kinds share the signing key but carry different markers: session tokens
have ``type="access"``, verification tokens have
``purpose="email-verification"``. Each decoder rejects the other kind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from japama.config import settings
from japama.core.exceptions import (
    AuthenticationException,
    DependencyException,
    ErrorCode,
    ValidationException,
)
from japama.core.roles import Role

log = logging.getLogger(__name__)

SESSION_TOKEN_TYPE = "access"
EMAIL_VERIFICATION_PURPOSE = "email-verification"


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    role: str


@dataclass(frozen=True)
class VerificationClaims:
    user_id: int
    email: str


def _encode(payload: dict, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {**payload, "iat": now, "exp": now + expires_delta}
    try:
        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    except JWTError as exc:
        log.error("Error generating token: %s", exc)
        raise DependencyException("Failed to generate token") from exc


def _decode(token: str) -> dict:
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


# ── Session tokens ──────────────────────────────────────

def create_session_token(
    user_id: int,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Bearer token carrying identity and role, valid for 7 days by default."""
    return _encode(
        {"sub": str(user_id), "role": role, "type": SESSION_TOKEN_TYPE},
        expires_delta or timedelta(days=settings.SESSION_TOKEN_EXPIRE_DAYS),
    )


def decode_session_token(token: str) -> SessionClaims:
    """Validate signature, expiry and shape of a session token."""
    invalid = AuthenticationException("Invalid or expired token", ErrorCode.INVALID_SESSION)
    try:
        payload = _decode(token)
    except JWTError:
        raise invalid

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise invalid
    try:
        user_id = int(payload["sub"])
        role = Role(payload["role"]).value
    except (KeyError, TypeError, ValueError):
        raise invalid
    return SessionClaims(user_id=user_id, role=role)


# ── Email verification tokens ───────────────────────────

def create_verification_token(
    user_id: int,
    email: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Stateless proof of email ownership, valid for 24 hours by default."""
    return _encode(
        {"sub": str(user_id), "email": email, "purpose": EMAIL_VERIFICATION_PURPOSE},
        expires_delta or timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
    )


def decode_verification_token(token: str) -> VerificationClaims:
    """Validate a verification token; expiry is reported separately."""
    try:
        payload = _decode(token)
    except ExpiredSignatureError:
        raise ValidationException("Verification token has expired", ErrorCode.TOKEN_EXPIRED)
    except JWTError:
        raise ValidationException("Invalid verification token", ErrorCode.INVALID_TOKEN)

    if payload.get("purpose") != EMAIL_VERIFICATION_PURPOSE:
        raise ValidationException("Invalid verification token", ErrorCode.INVALID_TOKEN)
    try:
        return VerificationClaims(user_id=int(payload["sub"]), email=str(payload["email"]))
    except (KeyError, TypeError, ValueError):
        raise ValidationException("Invalid verification token", ErrorCode.INVALID_TOKEN)
