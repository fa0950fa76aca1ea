"""
Inspection report endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_current_claims, get_db
from japama.schemas.billing import ReportCreate, ReportOut, ReportUpdate
from japama.services import report_service

router = APIRouter(dependencies=[Depends(get_current_claims)])


@router.post("", response_model=ReportOut, status_code=status.HTTP_201_CREATED)
async def create_report(body: ReportCreate, db: AsyncSession = Depends(get_db)):
    return await report_service.create_report(
        db,
        report_date=body.report_date,
        house_id=body.house_id,
        comments=body.comments,
    )


@router.get("", response_model=list[ReportOut])
async def list_reports(db: AsyncSession = Depends(get_db)):
    return await report_service.get_all_reports(db)


@router.get("/{report_id}", response_model=ReportOut)
async def get_report(report_id: int, db: AsyncSession = Depends(get_db)):
    return await report_service.get_report(db, report_id)


@router.patch("/{report_id}", response_model=ReportOut)
async def update_report(report_id: int, body: ReportUpdate, db: AsyncSession = Depends(get_db)):
    return await report_service.update_report(
        db, report_id, **body.model_dump(exclude_unset=True)
    )


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(report_id: int, db: AsyncSession = Depends(get_db)):
    await report_service.delete_report(db, report_id)
