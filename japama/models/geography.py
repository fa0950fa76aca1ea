"""
Service-area hierarchy: subdivision → street → house.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import String, Boolean, DateTime, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from japama.database import Base

if TYPE_CHECKING:
    from japama.models.report import Report


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Subdivision(Base):
    __tablename__ = "subdivisions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    streets: Mapped[list[Street]] = relationship("Street", back_populates="subdivision")


class Street(Base):
    __tablename__ = "streets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    subdivision_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subdivisions.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    subdivision: Mapped[Subdivision] = relationship(
        "Subdivision", back_populates="streets", lazy="selectin"
    )
    houses: Mapped[list[House]] = relationship("House", back_populates="street")


class House(Base):
    __tablename__ = "houses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    house_number: Mapped[str] = mapped_column(String(32), nullable=False)
    inhabited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_water: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    street_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("streets.id"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    street: Mapped[Street] = relationship("Street", back_populates="houses", lazy="selectin")
    reports: Mapped[list[Report]] = relationship(
        "Report", back_populates="house", cascade="all, delete-orphan"
    )
