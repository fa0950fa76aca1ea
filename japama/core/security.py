"""
Password hashing with bcrypt.
"""

import logging

import bcrypt

from japama.config import settings
from japama.core.exceptions import DependencyException

log = logging.getLogger(__name__)

MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash ``password`` with a fresh random salt."""
    try:
        salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")
    except (ValueError, TypeError) as exc:
        log.error("Error hashing password: %s", exc)
        raise DependencyException("Failed to hash password") from exc


def verify_password(password: str, hashed: str) -> bool:
    """Constant-time check of ``password`` against a stored bcrypt hash.

    Returns False on mismatch; raises DependencyException only when the
    stored hash itself is malformed.
    """
    encoded = password.encode("utf-8")
    # Nothing longer than bcrypt's input limit can have been hashed
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
    except (ValueError, TypeError) as exc:
        log.error("Error comparing passwords: %s", exc)
        raise DependencyException("Failed to compare passwords") from exc
