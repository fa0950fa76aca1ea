"""
Pydantic schemas for subdivisions, streets and houses.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ── Subdivisions ────────────────────────────────────────

class SubdivisionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)


class SubdivisionUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)


class SubdivisionOut(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SubdivisionBrief(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


# ── Streets ─────────────────────────────────────────────

class StreetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    subdivision_id: int


class StreetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subdivision_id: Optional[int] = None


class StreetBrief(BaseModel):
    id: int
    name: str
    subdivision_id: int
    subdivision: Optional[SubdivisionBrief] = None

    model_config = {"from_attributes": True}


class StreetOut(StreetBrief):
    created_at: datetime
    updated_at: Optional[datetime] = None


# ── Houses ──────────────────────────────────────────────

class HouseCreate(BaseModel):
    house_number: str = Field(..., min_length=1, max_length=32)
    inhabited: bool = False
    has_water: bool = False
    street_id: int


class HouseUpdate(BaseModel):
    house_number: Optional[str] = Field(default=None, min_length=1, max_length=32)
    inhabited: Optional[bool] = None
    has_water: Optional[bool] = None
    street_id: Optional[int] = None


class HouseBrief(BaseModel):
    id: int
    house_number: str
    inhabited: bool
    has_water: bool
    street_id: int

    model_config = {"from_attributes": True}


class HouseOut(HouseBrief):
    street: Optional[StreetBrief] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
