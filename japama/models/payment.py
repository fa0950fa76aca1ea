"""
Payment model — snapshot of a one-time charge for a house.

The house row is removed when it is paid, so the payment keeps its own copy
of ``house_id``/``house_number`` instead of a foreign key.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from japama.database import Base

if TYPE_CHECKING:
    from japama.models.geography import Street, Subdivision
    from japama.models.user import User


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subdivision_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subdivisions.id"), nullable=False, index=True
    )
    street_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("streets.id"), nullable=False, index=True
    )
    house_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    house_number: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    cobrador_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    cobrador: Mapped[User] = relationship("User", lazy="selectin")
    street: Mapped[Street] = relationship("Street", lazy="selectin")
    subdivision: Mapped[Subdivision] = relationship("Subdivision", lazy="selectin")
