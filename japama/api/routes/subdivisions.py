"""
Subdivision endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_claims, get_db, require_roles
from japama.core.roles import ALL_ROLES, Role
from japama.schemas.billing import PaymentOut
from japama.schemas.geography import HouseOut, SubdivisionCreate, SubdivisionOut, SubdivisionUpdate
from japama.services import house_service, payment_service, subdivision_service

router = APIRouter()

any_role = [Depends(require_roles(*ALL_ROLES))]


@router.post(
    "",
    response_model=SubdivisionOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=any_role,
)
async def create_subdivision(body: SubdivisionCreate, db: AsyncSession = Depends(get_db)):
    return await subdivision_service.create_subdivision(db, body.name)


@router.get("", response_model=list[SubdivisionOut], dependencies=any_role)
async def list_subdivisions(db: AsyncSession = Depends(get_db)):
    return await subdivision_service.get_all_subdivisions(db)


@router.get("/{subdivision_id}", response_model=SubdivisionOut, dependencies=any_role)
async def get_subdivision(subdivision_id: int, db: AsyncSession = Depends(get_db)):
    return await subdivision_service.get_subdivision(db, subdivision_id)


@router.patch("/{subdivision_id}", response_model=SubdivisionOut, dependencies=any_role)
async def update_subdivision(
    subdivision_id: int,
    body: SubdivisionUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await subdivision_service.update_subdivision(db, subdivision_id, body.name)


@router.delete(
    "/{subdivision_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(Role.ADMIN, Role.COBRADOR))],
)
async def delete_subdivision(subdivision_id: int, db: AsyncSession = Depends(get_db)):
    await subdivision_service.delete_subdivision(db, subdivision_id)


@router.get(
    "/{subdivision_id}/houses",
    response_model=list[HouseOut],
    dependencies=[Depends(get_current_claims)],
)
async def list_subdivision_houses(subdivision_id: int, db: AsyncSession = Depends(get_db)):
    """Houses in a subdivision, grouped by street then house number."""
    return await house_service.get_houses_by_subdivision(db, subdivision_id)


@router.get(
    "/{subdivision_id}/payments",
    response_model=list[PaymentOut],
    dependencies=[Depends(require_roles(Role.ADMIN, Role.COBRADOR))],
)
async def list_subdivision_payments(subdivision_id: int, db: AsyncSession = Depends(get_db)):
    return await payment_service.get_payments_by_subdivision(db, subdivision_id)
