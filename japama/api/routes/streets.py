"""
Street endpoints. Streets are laid out by inspectors in the field.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_claims, get_db, require_roles
from japama.core.roles import Role
from japama.schemas.geography import HouseOut, StreetCreate, StreetOut, StreetUpdate
from japama.services import house_service, street_service

router = APIRouter(dependencies=[Depends(get_current_claims)])


@router.post(
    "",
    response_model=StreetOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(Role.INSPECTOR))],
)
async def create_street(body: StreetCreate, db: AsyncSession = Depends(get_db)):
    return await street_service.create_street(db, body.name, body.subdivision_id)


@router.get("", response_model=list[StreetOut])
async def list_streets(
    subdivision_id: Optional[int] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    return await street_service.get_all_streets(db, subdivision_id=subdivision_id)


@router.get("/{street_id}", response_model=StreetOut)
async def get_street(street_id: int, db: AsyncSession = Depends(get_db)):
    return await street_service.get_street(db, street_id)


@router.patch("/{street_id}", response_model=StreetOut)
async def update_street(street_id: int, body: StreetUpdate, db: AsyncSession = Depends(get_db)):
    return await street_service.update_street(
        db, street_id, **body.model_dump(exclude_unset=True)
    )


@router.get("/{street_id}/houses", response_model=list[HouseOut])
async def list_street_houses(street_id: int, db: AsyncSession = Depends(get_db)):
    return await house_service.get_houses_by_street(db, street_id)
