"""
Payment service — one-time collection for a house.

Paying a house records a payment snapshot and removes the house from the
active roll. Both writes happen in the request's transaction, so either the
house is billed and gone or nothing changed.
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from japama.models.payment import Payment
from japama.core.exceptions import NotFoundException, ValidationException
from japama.services.house_service import get_house

log = logging.getLogger(__name__)


async def process_payment(
    db: AsyncSession,
    house_id: int,
    amount: Decimal,
    cobrador_id: int,
) -> Payment:
    """Bill ``house_id`` once and delete it."""
    if amount is None or amount <= 0:
        raise ValidationException("Amount must be greater than 0")

    house = await get_house(db, house_id)
    street = house.street
    if street is None:
        raise NotFoundException("Street")
    subdivision = street.subdivision
    if subdivision is None:
        raise NotFoundException("Subdivision")

    payment = Payment(
        subdivision_id=subdivision.id,
        street_id=street.id,
        house_id=house.id,
        house_number=house.house_number,
        amount=amount,
        cobrador_id=cobrador_id,
    )
    db.add(payment)
    await db.delete(house)
    await db.flush()
    log.info("House %s paid (%s) by cobrador %s", house_id, amount, cobrador_id)
    return await get_payment(db, payment.id)


def _payments_query():
    return select(Payment).order_by(Payment.created_at.desc(), Payment.id.desc())


async def get_payment(db: AsyncSession, payment_id: int) -> Payment:
    result = await db.execute(
        select(Payment)
        .where(Payment.id == payment_id)
        .execution_options(populate_existing=True)
    )
    payment = result.scalar_one_or_none()
    if payment is None:
        raise NotFoundException("Payment")
    return payment


async def get_all_payments(db: AsyncSession) -> list[Payment]:
    result = await db.execute(_payments_query())
    return list(result.scalars().all())


async def get_payments_by_subdivision(db: AsyncSession, subdivision_id: int) -> list[Payment]:
    result = await db.execute(_payments_query().where(Payment.subdivision_id == subdivision_id))
    return list(result.scalars().all())


async def get_payments_by_cobrador(db: AsyncSession, cobrador_id: int) -> list[Payment]:
    result = await db.execute(_payments_query().where(Payment.cobrador_id == cobrador_id))
    return list(result.scalars().all())
