"""
House CRUD service.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from japama.models.geography import House, Street
from japama.core.exceptions import NotFoundException
from japama.services.street_service import get_street
from japama.services.subdivision_service import get_subdivision


async def create_house(
    db: AsyncSession,
    house_number: str,
    street_id: int,
    inhabited: bool = False,
    has_water: bool = False,
) -> House:
    """Create a house on an existing street."""
    await get_street(db, street_id)
    house = House(
        house_number=house_number,
        street_id=street_id,
        inhabited=inhabited,
        has_water=has_water,
    )
    db.add(house)
    await db.flush()
    return await get_house(db, house.id)


async def get_house(db: AsyncSession, house_id: int) -> House:
    result = await db.execute(
        select(House)
        .where(House.id == house_id)
        .execution_options(populate_existing=True)
    )
    house = result.scalar_one_or_none()
    if house is None:
        raise NotFoundException("House")
    return house


async def get_all_houses(db: AsyncSession) -> list[House]:
    result = await db.execute(select(House).order_by(House.created_at.desc(), House.id.desc()))
    return list(result.scalars().all())


async def get_houses_by_street(db: AsyncSession, street_id: int) -> list[House]:
    await get_street(db, street_id)
    result = await db.execute(
        select(House).where(House.street_id == street_id).order_by(House.house_number.asc())
    )
    return list(result.scalars().all())


async def get_houses_by_subdivision(db: AsyncSession, subdivision_id: int) -> list[House]:
    await get_subdivision(db, subdivision_id)
    result = await db.execute(
        select(House)
        .join(Street, House.street_id == Street.id)
        .where(Street.subdivision_id == subdivision_id)
        .order_by(House.street_id.asc(), House.house_number.asc())
    )
    return list(result.scalars().all())


async def update_house(db: AsyncSession, house_id: int, **kwargs) -> House:
    """Update house fields; a new street must exist."""
    house = await get_house(db, house_id)
    street_id: Optional[int] = kwargs.get("street_id")
    if street_id is not None and street_id != house.street_id:
        await get_street(db, street_id)
    for key, value in kwargs.items():
        if value is not None and hasattr(house, key):
            setattr(house, key, value)
    await db.flush()
    return await get_house(db, house_id)


async def delete_house(db: AsyncSession, house_id: int) -> None:
    """Delete a house together with its reports."""
    house = await get_house(db, house_id)
    await db.delete(house)
    await db.flush()
