# backend/schemas/category.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import ORMBase


class CategoryBase(ORMBase):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=16)


class CategoryCreate(CategoryBase):
    pass


# PUT payload, every field optional
class CategoryUpdate(ORMBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=16)


class CategorySummary(ORMBase):
    id: int
    name: str


class CategoryOut(CategoryBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime
