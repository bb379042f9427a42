# backend/schemas/location.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import ORMBase


class LocationBase(ORMBase):
    title: str = Field(..., min_length=1, max_length=255)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationCreate(LocationBase):
    pass


class LocationUpdate(ORMBase):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)


class LocationSummary(ORMBase):
    id: int
    title: str
    latitude: float
    longitude: float


class LocationOut(LocationBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime
