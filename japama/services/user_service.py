"""
User lookups and admin profile management.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from japama.config import settings
from japama.core.exceptions import ConflictException, ErrorCode, NotFoundException
from japama.core.roles import Role
from japama.core.security import hash_password
from japama.models.user import User

log = logging.getLogger(__name__)


async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
    """Fetch a user by ID."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundException("User", ErrorCode.USER_NOT_FOUND)
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession, role: Optional[Role] = None) -> list[User]:
    query = select(User).order_by(User.created_at.desc())
    if role is not None:
        query = query.where(User.role == role.value)
    result = await db.execute(query)
    return list(result.scalars().all())


async def update_user_profile(
    db: AsyncSession,
    user_id: int,
    name: Optional[str] = None,
    lastname: Optional[str] = None,
    username: Optional[str] = None,
) -> User:
    """Update name/lastname/username. Role and password are not editable here."""
    user = await get_user_by_id(db, user_id)

    if username is not None and username != user.username:
        if await get_user_by_username(db, username):
            raise ConflictException("Username already taken", ErrorCode.DUPLICATE_USERNAME)
        user.username = username
    if name is not None:
        user.name = name
    if lastname is not None:
        user.lastname = lastname

    try:
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise ConflictException("Username already taken", ErrorCode.DUPLICATE_USERNAME)
    await db.refresh(user)
    return user


async def seed_admin(db: AsyncSession) -> Optional[User]:
    """Create the configured admin if no admin exists.

    Registration is admin-only, so the first admin has to come from config.
    The seeded account is already verified.
    """
    result = await db.execute(select(User).where(User.role == Role.ADMIN.value).limit(1))
    if result.scalar_one_or_none() is not None:
        log.info("Admin user already exists — skipping seed")
        return None

    admin = User(
        name=settings.ADMIN_NAME,
        lastname=settings.ADMIN_LASTNAME,
        email=settings.ADMIN_EMAIL,
        username=settings.ADMIN_USERNAME,
        hashed_password=hash_password(settings.ADMIN_PASSWORD),
        role=Role.ADMIN.value,
        is_verified=True,
    )
    db.add(admin)
    await db.flush()
    log.info("Default admin user created (%s)", settings.ADMIN_USERNAME)
    return admin
