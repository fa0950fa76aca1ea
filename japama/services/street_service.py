"""
Street CRUD service.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from japama.models.geography import Street
from japama.core.exceptions import NotFoundException
from japama.services.subdivision_service import get_subdivision


async def create_street(db: AsyncSession, name: str, subdivision_id: int) -> Street:
    """Create a street inside an existing subdivision."""
    await get_subdivision(db, subdivision_id)
    street = Street(name=name, subdivision_id=subdivision_id)
    db.add(street)
    await db.flush()
    return await get_street(db, street.id)


async def get_street(db: AsyncSession, street_id: int) -> Street:
    result = await db.execute(
        select(Street)
        .where(Street.id == street_id)
        .execution_options(populate_existing=True)
    )
    street = result.scalar_one_or_none()
    if street is None:
        raise NotFoundException("Street")
    return street


async def get_all_streets(db: AsyncSession, subdivision_id: Optional[int] = None) -> list[Street]:
    query = select(Street).order_by(Street.name.asc())
    if subdivision_id is not None:
        query = query.where(Street.subdivision_id == subdivision_id)
    result = await db.execute(query)
    return list(result.scalars().all())


async def update_street(
    db: AsyncSession,
    street_id: int,
    name: Optional[str] = None,
    subdivision_id: Optional[int] = None,
) -> Street:
    street = await get_street(db, street_id)
    if subdivision_id is not None and subdivision_id != street.subdivision_id:
        await get_subdivision(db, subdivision_id)
        street.subdivision_id = subdivision_id
    if name is not None:
        street.name = name
    await db.flush()
    return await get_street(db, street_id)
