"""
Email-verification strategies.

Exactly one strategy is active per deployment (``VERIFICATION_STRATEGY``):

* ``code`` — a 6-digit code stored in ``verification_codes`` for 10 minutes.
  Redeeming deletes the row; the delete is the commit point, so a second
  redemption of the same code finds nothing and fails as invalid.
* ``link`` — a signed JWT (24 hours) mailed as a link. Nothing is stored;
  replay is stopped by the ``is_verified`` flip, which is a conditional
  UPDATE so only one redemption can win.
"""

from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta, timezone
from urllib.parse import urlencode

from sqlalchemy import delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from japama.config import settings
from japama.core.exceptions import (
    ConflictException,
    ErrorCode,
    ValidationException,
)
from japama.core.tokens import create_verification_token, decode_verification_token
from japama.models.user import User
from japama.models.verification_code import VerificationCode
from japama.services.email_service import (
    VERIFICATION_CODE_SUBJECT,
    VERIFICATION_LINK_SUBJECT,
    EmailSender,
    render_verification_code,
    render_verification_link,
)
from japama.services.user_service import get_user_by_email

log = logging.getLogger(__name__)

CODE_MIN = 100_000
CODE_MAX = 999_999


def generate_code() -> str:
    """Uniform 6-digit code in [100000, 999999]."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


async def mark_verified(db: AsyncSession, user: User) -> User:
    """Flip ``is_verified`` false → true; fails if someone already did."""
    result = await db.execute(
        update(User)
        .where(User.id == user.id, User.is_verified.is_(False))
        .values(is_verified=True)
    )
    if result.rowcount == 0:
        raise ConflictException("User already verified", ErrorCode.ALREADY_VERIFIED)
    await db.flush()
    await db.refresh(user)
    return user


def _ensure_pending(user: User) -> None:
    if user.is_verified:
        raise ConflictException("User already verified", ErrorCode.ALREADY_VERIFIED)


class CodeVerification:
    name = "code"
    # The user has no other way to get the code, so a failed send is fatal.
    delivery_required = True

    async def issue(self, db: AsyncSession, user: User) -> str:
        """Replace any outstanding codes for ``user`` with a fresh one."""
        await db.execute(delete(VerificationCode).where(VerificationCode.user_id == user.id))
        code = generate_code()
        db.add(VerificationCode(
            user_id=user.id,
            code=code,
            expires_at=datetime.now(timezone.utc)
            + timedelta(minutes=settings.VERIFICATION_CODE_EXPIRE_MINUTES),
        ))
        await db.flush()
        return code

    async def send(self, mailer: EmailSender, user: User, code: str) -> None:
        html, text = render_verification_code(
            user.name, code, settings.VERIFICATION_CODE_EXPIRE_MINUTES
        )
        await mailer.send(user.email, VERIFICATION_CODE_SUBJECT, html, text)

    async def redeem(self, db: AsyncSession, email: str, code: str) -> User:
        user = await get_user_by_email(db, email)
        if user is None:
            raise ValidationException("User not found", ErrorCode.USER_NOT_FOUND)

        # A redeemed code is gone, so reuse reads as invalid, not as verified.
        consumed = await db.execute(
            delete(VerificationCode).where(
                VerificationCode.user_id == user.id,
                VerificationCode.code == code,
                VerificationCode.expires_at > datetime.now(timezone.utc),
            )
        )
        if consumed.rowcount == 0:
            raise ValidationException(
                "Invalid or expired verification code",
                ErrorCode.INVALID_OR_EXPIRED_CODE,
            )
        return await mark_verified(db, user)


class LinkVerification:
    name = "link"
    delivery_required = False

    async def issue(self, db: AsyncSession, user: User) -> str:
        # Stateless: a new token simply coexists with older unexpired ones.
        return create_verification_token(user.id, user.email)

    async def send(self, mailer: EmailSender, user: User, token: str) -> None:
        html, text = render_verification_link(
            user.name, build_verification_url(token), settings.VERIFICATION_TOKEN_EXPIRE_HOURS
        )
        await mailer.send(user.email, VERIFICATION_LINK_SUBJECT, html, text)

    async def redeem(self, db: AsyncSession, token: str) -> User:
        claims = decode_verification_token(token)
        user = await db.get(User, claims.user_id)
        if user is None:
            raise ValidationException("User not found", ErrorCode.USER_NOT_FOUND)
        _ensure_pending(user)
        # Stale link after an email change
        if user.email != claims.email:
            raise ValidationException(
                "Verification token does not match the current email",
                ErrorCode.EMAIL_MISMATCH,
            )
        return await mark_verified(db, user)


def build_verification_url(token: str) -> str:
    base = settings.FRONTEND_URL.rstrip("/")
    return f"{base}/api/auth/verify-email?{urlencode({'token': token})}"


STRATEGIES = {
    CodeVerification.name: CodeVerification(),
    LinkVerification.name: LinkVerification(),
}


def get_strategy(name: str | None = None) -> CodeVerification | LinkVerification:
    """Return the strategy configured for this deployment."""
    return STRATEGIES[name or settings.VERIFICATION_STRATEGY]
