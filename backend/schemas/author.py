# backend/schemas/author.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import ORMBase


class AuthorBase(ORMBase):
    name: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = None


class AuthorCreate(AuthorBase):
    pass


class AuthorUpdate(ORMBase):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None


class AuthorSummary(ORMBase):
    id: int
    name: str


class AuthorOut(AuthorBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime
