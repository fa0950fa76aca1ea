"""
FastAPI dependencies — DB session, mailer, bearer session, role guards.

Route guards compose the same way everywhere::

    @router.delete("/{id}")
    async def delete(..., _claims = Depends(require_roles(Role.ADMIN))): ...
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.exceptions import AuthenticationException, ForbiddenException
from japama.core.roles import Role, permit
from japama.core.tokens import SessionClaims, decode_session_token
from japama.database import get_db
from japama.models.user import User
from japama.services.email_service import EmailSender
from japama.services.user_service import get_user_by_id

__all__ = [
    "get_db",
    "get_mailer",
    "get_current_claims",
    "get_current_user",
    "require_roles",
]

_bearer = HTTPBearer(auto_error=False)


def get_mailer(request: Request) -> EmailSender:
    """The process-wide email sender built in ``create_app``."""
    return request.app.state.mailer


async def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> SessionClaims:
    """Decode ``Authorization: Bearer <token>``; 401 when absent or invalid."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("No token provided")
    return decode_session_token(credentials.credentials)


async def get_current_user(
    claims: SessionClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_db),
) -> User:
    return await get_user_by_id(db, claims.user_id)


def require_roles(*roles: Role):
    """Dependency factory: allow only sessions whose role claim is in ``roles``."""
    allowed = [Role(r).value for r in roles]

    async def _guard(claims: SessionClaims = Depends(get_current_claims)) -> SessionClaims:
        if not permit(claims.role, roles):
            raise ForbiddenException(
                "Forbidden: You dont have permission to access this resource",
                required_roles=allowed,
                your_role=claims.role,
            )
        return claims

    return _guard
