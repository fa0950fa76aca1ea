"""
Auth API endpoints — register (admin), verify, login, resend, me.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_user, get_db, get_mailer, require_roles
from japama.core.roles import Role
from japama.models.user import User
from japama.schemas.user import (
    LoginResponse,
    MessageResponse,
    ResendVerificationRequest,
    UserCreate,
    UserLogin,
    UserOut,
    VerifyCodeRequest,
)
from japama.services import auth_service
from japama.services.email_service import EmailSender

router = APIRouter()


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(Role.ADMIN))],
)
async def register(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_mailer),
):
    """Create an account for a staff member and send the verification email."""
    return await auth_service.register_user(db, payload, mailer)


@router.get("/verify-email", response_model=UserOut)
async def verify_email(
    token: str = Query(..., min_length=1),
    db: AsyncSession = Depends(get_db),
):
    """Verify an email address from the link sent at registration."""
    return await auth_service.verify_email_token(db, token)


@router.post("/verify-code", response_model=UserOut)
async def verify_code(payload: VerifyCodeRequest, db: AsyncSession = Depends(get_db)):
    """Verify an email address with the 6-digit code sent at registration."""
    return await auth_service.verify_email_code(db, payload.email, payload.code)


@router.post("/login", response_model=LoginResponse)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    """Authenticate and receive a session token."""
    return await auth_service.authenticate_user(db, payload.email, payload.password)


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    payload: ResendVerificationRequest,
    db: AsyncSession = Depends(get_db),
    mailer: EmailSender = Depends(get_mailer),
):
    await auth_service.resend_verification(db, payload.email, mailer)
    return MessageResponse(message="Verification sent successfully. Please check your email.")


@router.get("/me", response_model=UserOut)
async def me(current_user: User = Depends(get_current_user)):
    """Get the current authenticated user's profile."""
    return current_user
