# backend/schemas/stock_history.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from schemas.common import ORMBase


class StockHistoryCreate(ORMBase):
    # Signed delta, negative for stock going out
    quantity: int
    note: Optional[str] = Field(default=None, max_length=1000)


class StockHistoryOut(ORMBase):
    id: int
    user_id: str
    item_id: int
    quantity: int
    note: Optional[str] = None
    created_at: datetime


class StockHistoryList(ORMBase):
    entries: List[StockHistoryOut]
    quantity: int
