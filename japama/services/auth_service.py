"""
Auth service — registration, email verification, login.

A user moves Unregistered → PendingVerification (``register_user``) →
Verified (``verify_email_token`` / ``verify_email_code``). Only verified
users can log in.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from japama.config import settings
from japama.models.user import User
from japama.core.security import hash_password, verify_password
from japama.core.tokens import create_session_token
from japama.core.exceptions import (
    AuthenticationException,
    ConflictException,
    DependencyException,
    ErrorCode,
    ValidationException,
)
from japama.schemas.user import UserCreate, LoginResponse, UserOut
from japama.services.email_service import DeliveryError, EmailSender
from japama.services.user_service import get_user_by_email, get_user_by_username
from japama.services.verification import get_strategy

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


async def register_user(db: AsyncSession, payload: UserCreate, mailer: EmailSender) -> User:
    """Create a pending user and send the verification artifact.

    Raises ConflictException if email/username is taken.
    """

    # Fast-path checks for clean messages; the unique constraints decide.
    if await get_user_by_email(db, payload.email):
        raise ConflictException("Email already registered", ErrorCode.DUPLICATE_EMAIL)

    if await get_user_by_username(db, payload.username):
        raise ConflictException("Username already taken", ErrorCode.DUPLICATE_USERNAME)

    user = User(
        name=payload.name,
        lastname=payload.lastname,
        email=payload.email,
        username=payload.username,
        hashed_password=hash_password(payload.password),
        role=payload.role.value,
        is_verified=False,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        await db.rollback()
        log.info("Unique constraint hit while registering %s: %s", payload.email, exc.orig)
        raise ConflictException("Email or username already registered")
    await db.refresh(user)

    await _issue_and_send(db, user, mailer)
    log.info("Registered user %s (%s) pending verification", user.id, user.role)
    return user


async def verify_email_token(db: AsyncSession, token: str) -> User:
    """Redeem a verification link token."""
    strategy = _require_strategy("link")
    user = await strategy.redeem(db, token)
    log.info("User %s verified via link", user.id)
    return user


async def verify_email_code(db: AsyncSession, email: str, code: str) -> User:
    """Redeem a 6-digit verification code."""
    strategy = _require_strategy("code")
    user = await strategy.redeem(db, email, code)
    log.info("User %s verified via code", user.id)
    return user


async def resend_verification(db: AsyncSession, email: str, mailer: EmailSender) -> None:
    """Replace the outstanding artifact and send it again."""
    user = await get_user_by_email(db, email)
    if user is None:
        raise ValidationException("User not found", ErrorCode.USER_NOT_FOUND)
    if user.is_verified:
        raise ValidationException("User already verified", ErrorCode.ALREADY_VERIFIED)

    await _issue_and_send(db, user, mailer)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> LoginResponse:
    """Validate credentials and return a session token with the profile."""
    user = await get_user_by_email(db, email)

    # Same error for unknown email and wrong password
    if user is None or not verify_password(password, user.hashed_password):
        raise AuthenticationException(INVALID_CREDENTIALS, ErrorCode.INVALID_CREDENTIALS)

    if not user.is_verified:
        raise AuthenticationException(
            "Please verify your email before logging in", ErrorCode.NOT_VERIFIED
        )

    return LoginResponse(
        token=create_session_token(user.id, user.role),
        user=UserOut.model_validate(user),
    )


async def _issue_and_send(db: AsyncSession, user: User, mailer: EmailSender) -> None:
    strategy = get_strategy()
    artifact = await strategy.issue(db, user)
    try:
        await strategy.send(mailer, user, artifact)
    except DeliveryError as exc:
        if strategy.delivery_required:
            raise DependencyException("Failed to send verification email") from exc
        log.warning("Verification email for user %s not delivered: %s", user.id, exc)


def _require_strategy(name: str):
    if settings.VERIFICATION_STRATEGY != name:
        raise ValidationException(
            f"Verification by {name} is not enabled",
            ErrorCode.VERIFICATION_METHOD_DISABLED,
        )
    return get_strategy(name)
