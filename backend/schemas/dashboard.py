# backend/schemas/dashboard.py
from typing import List

from schemas.common import ORMBase
from schemas.item import ItemOut


class DashboardStats(ORMBase):
    total_items: int
    public_items: int
    private_items: int
    categories: int
    locations: int
    authors: int
    recent_items: List[ItemOut]
