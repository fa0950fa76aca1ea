"""
Payment endpoints — only admins and cobradores see money.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from japama.core.dependencies import get_db, require_roles
from japama.core.roles import Role
from japama.core.tokens import SessionClaims
from japama.schemas.billing import PaymentCreate, PaymentOut
from japama.services import payment_service

router = APIRouter()

billing_roles = require_roles(Role.ADMIN, Role.COBRADOR)


@router.post("/payments", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
async def process_payment(
    body: PaymentCreate,
    db: AsyncSession = Depends(get_db),
    claims: SessionClaims = Depends(billing_roles),
):
    """Collect the payment for a house and remove it from the active roll."""
    return await payment_service.process_payment(
        db, house_id=body.house_id, amount=body.amount, cobrador_id=claims.user_id
    )


@router.get("/payments", response_model=list[PaymentOut], dependencies=[Depends(billing_roles)])
async def list_payments(db: AsyncSession = Depends(get_db)):
    return await payment_service.get_all_payments(db)


@router.get(
    "/payments/{payment_id}",
    response_model=PaymentOut,
    dependencies=[Depends(billing_roles)],
)
async def get_payment(payment_id: int, db: AsyncSession = Depends(get_db)):
    return await payment_service.get_payment(db, payment_id)


@router.get(
    "/cobradores/{cobrador_id}/payments",
    response_model=list[PaymentOut],
    dependencies=[Depends(billing_roles)],
)
async def list_cobrador_payments(cobrador_id: int, db: AsyncSession = Depends(get_db)):
    return await payment_service.get_payments_by_cobrador(db, cobrador_id)
