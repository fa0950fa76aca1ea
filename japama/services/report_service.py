"""
Inspection report CRUD service.
"""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from japama.models.report import Report
from japama.core.exceptions import NotFoundException
from japama.services.house_service import get_house


async def create_report(
    db: AsyncSession,
    report_date: date,
    house_id: int,
    comments: Optional[str] = None,
) -> Report:
    await get_house(db, house_id)
    report = Report(report_date=report_date, house_id=house_id, comments=comments)
    db.add(report)
    await db.flush()
    return await get_report(db, report.id)


async def get_report(db: AsyncSession, report_id: int) -> Report:
    result = await db.execute(
        select(Report)
        .where(Report.id == report_id)
        .execution_options(populate_existing=True)
    )
    report = result.scalar_one_or_none()
    if report is None:
        raise NotFoundException("Report")
    return report


async def get_all_reports(db: AsyncSession) -> list[Report]:
    """List reports, most recent report date first."""
    result = await db.execute(
        select(Report).order_by(Report.report_date.desc(), Report.id.desc())
    )
    return list(result.scalars().all())


async def get_reports_by_house(db: AsyncSession, house_id: int) -> list[Report]:
    await get_house(db, house_id)
    result = await db.execute(
        select(Report)
        .where(Report.house_id == house_id)
        .order_by(Report.report_date.desc(), Report.id.desc())
    )
    return list(result.scalars().all())


async def update_report(db: AsyncSession, report_id: int, **kwargs) -> Report:
    report = await get_report(db, report_id)
    house_id: Optional[int] = kwargs.get("house_id")
    if house_id is not None and house_id != report.house_id:
        await get_house(db, house_id)
    for key, value in kwargs.items():
        # comments may be cleared explicitly
        if (value is not None or key == "comments") and hasattr(report, key):
            setattr(report, key, value)
    await db.flush()
    return await get_report(db, report_id)


async def delete_report(db: AsyncSession, report_id: int) -> None:
    report = await get_report(db, report_id)
    await db.delete(report)
    await db.flush()
