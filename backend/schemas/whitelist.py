# backend/schemas/whitelist.py
from datetime import datetime
from typing import List

from pydantic import EmailStr

from schemas.common import ORMBase


class WhitelistCreate(ORMBase):
    email: EmailStr


class WhitelistBulkCreate(ORMBase):
    # Blank entries are skipped
    emails: List[str]


class WhitelistBulkResult(ORMBase):
    added: int


class WhitelistOut(ORMBase):
    id: int
    item_id: int
    email: str
    created_at: datetime
