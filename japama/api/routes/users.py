"""
User management endpoints (admin) and the caller's own profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_user, get_db, require_roles
from japama.core.roles import Role
from japama.models.user import User
from japama.schemas.user import UserOut, UserUpdate
from japama.services import user_service

router = APIRouter()

admin_only = [Depends(require_roles(Role.ADMIN))]


@router.get("/me", response_model=UserOut)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=list[UserOut], dependencies=admin_only)
async def list_users(
    role: Optional[Role] = Query(default=None, description="Filter by role"),
    db: AsyncSession = Depends(get_db),
):
    return await user_service.list_users(db, role=role)


@router.get("/{user_id}", response_model=UserOut, dependencies=admin_only)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db)):
    return await user_service.get_user_by_id(db, user_id)


@router.patch("/{user_id}", response_model=UserOut, dependencies=admin_only)
async def update_user(user_id: int, body: UserUpdate, db: AsyncSession = Depends(get_db)):
    """Update name, lastname or username."""
    return await user_service.update_user_profile(
        db, user_id, **body.model_dump(exclude_unset=True)
    )
