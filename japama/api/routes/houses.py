"""
House endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_claims, get_db
from japama.schemas.billing import ReportOut
from japama.schemas.geography import HouseCreate, HouseOut, HouseUpdate
from japama.services import house_service, report_service

router = APIRouter(dependencies=[Depends(get_current_claims)])


@router.post("", response_model=HouseOut, status_code=status.HTTP_201_CREATED)
async def create_house(body: HouseCreate, db: AsyncSession = Depends(get_db)):
    return await house_service.create_house(
        db,
        house_number=body.house_number,
        street_id=body.street_id,
        inhabited=body.inhabited,
        has_water=body.has_water,
    )


@router.get("", response_model=list[HouseOut])
async def list_houses(db: AsyncSession = Depends(get_db)):
    return await house_service.get_all_houses(db)


@router.get("/{house_id}", response_model=HouseOut)
async def get_house(house_id: int, db: AsyncSession = Depends(get_db)):
    return await house_service.get_house(db, house_id)


@router.patch("/{house_id}", response_model=HouseOut)
async def update_house(house_id: int, body: HouseUpdate, db: AsyncSession = Depends(get_db)):
    return await house_service.update_house(
        db, house_id, **body.model_dump(exclude_unset=True)
    )


@router.delete("/{house_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_house(house_id: int, db: AsyncSession = Depends(get_db)):
    await house_service.delete_house(db, house_id)


@router.get("/{house_id}/reports", response_model=list[ReportOut])
async def list_house_reports(house_id: int, db: AsyncSession = Depends(get_db)):
    return await report_service.get_reports_by_house(db, house_id)
