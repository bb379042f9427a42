# backend/schemas/account_deletion.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.common import ORMBase


class AccountDeletionOut(ORMBase):
    id: int
    user_id: str
    user_email: Optional[str] = None
    status: str
    scheduled_at: datetime
    created_at: datetime
    updated_at: datetime


class AccountDeletionStatus(ORMBase):
    pending: bool
    deletion: Optional[AccountDeletionOut] = None


class AccountDeletionRequested(ORMBase):
    message: str
    deletion: AccountDeletionOut


# Body posted back by the scheduler
class DeletionCallback(ORMBase):
    user_id: str = Field(..., min_length=1)
