"""
Subdivision CRUD service.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from japama.models.geography import Subdivision, Street
from japama.core.exceptions import ConflictException, NotFoundException


async def create_subdivision(db: AsyncSession, name: str) -> Subdivision:
    subdivision = Subdivision(name=name)
    db.add(subdivision)
    await db.flush()
    await db.refresh(subdivision)
    return subdivision


async def get_subdivision(db: AsyncSession, subdivision_id: int) -> Subdivision:
    """Get a subdivision by ID."""
    subdivision = await db.get(Subdivision, subdivision_id)
    if subdivision is None:
        raise NotFoundException("Subdivision")
    return subdivision


async def get_all_subdivisions(db: AsyncSession) -> list[Subdivision]:
    """List all subdivisions, newest first."""
    result = await db.execute(
        select(Subdivision).order_by(Subdivision.created_at.desc(), Subdivision.id.desc())
    )
    return list(result.scalars().all())


async def update_subdivision(db: AsyncSession, subdivision_id: int, name: str) -> Subdivision:
    subdivision = await get_subdivision(db, subdivision_id)
    subdivision.name = name
    await db.flush()
    await db.refresh(subdivision)
    return subdivision


async def delete_subdivision(db: AsyncSession, subdivision_id: int) -> None:
    """Delete a subdivision that no longer has streets."""
    subdivision = await get_subdivision(db, subdivision_id)
    result = await db.execute(
        select(Street.id).where(Street.subdivision_id == subdivision_id).limit(1)
    )
    if result.scalar_one_or_none() is not None:
        raise ConflictException("Subdivision still has streets")
    await db.delete(subdivision)
    await db.flush()
