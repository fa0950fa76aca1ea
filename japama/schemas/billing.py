"""
Pydantic schemas for inspection reports and payments.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from japama.schemas.geography import HouseBrief, SubdivisionBrief
from japama.schemas.user import UserBrief


# ── Reports ─────────────────────────────────────────────

class ReportCreate(BaseModel):
    report_date: date
    comments: Optional[str] = None
    house_id: int


class ReportUpdate(BaseModel):
    report_date: Optional[date] = None
    comments: Optional[str] = None
    house_id: Optional[int] = None


class ReportOut(BaseModel):
    id: int
    report_date: date
    comments: Optional[str] = None
    house_id: int
    house: Optional[HouseBrief] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ── Payments ────────────────────────────────────────────

class PaymentCreate(BaseModel):
    house_id: int
    amount: Decimal = Field(..., max_digits=10, decimal_places=2)


class StreetName(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class PaymentOut(BaseModel):
    id: int
    subdivision_id: int
    street_id: int
    house_id: int
    house_number: str
    amount: Decimal
    cobrador_id: int
    cobrador: Optional[UserBrief] = None
    street: Optional[StreetName] = None
    subdivision: Optional[SubdivisionBrief] = None
    created_at: datetime

    model_config = {"from_attributes": True}
