"""
Pydantic schemas for auth and user endpoints.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from japama.core.roles import Role
from japama.core.security import MAX_PASSWORD_BYTES


# ── Auth / Registration ─────────────────────────────────

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    lastname: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=6, max_length=MAX_PASSWORD_BYTES)
    role: Role

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # bcrypt limits bytes, not characters
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class VerifyCodeRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=6)


class ResendVerificationRequest(BaseModel):
    email: EmailStr


# ── User responses ──────────────────────────────────────

class UserOut(BaseModel):
    id: int
    name: str
    lastname: str
    email: str
    username: str
    role: Role
    is_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    id: int
    name: str
    lastname: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut


class MessageResponse(BaseModel):
    message: str


# ── Profile updates (admin) ─────────────────────────────

class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=128)
    lastname: Optional[str] = Field(default=None, min_length=1, max_length=128)
    username: Optional[str] = Field(default=None, min_length=1, max_length=128)
