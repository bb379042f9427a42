# backend/crud/dashboard_crud.py
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from crud import items_crud
from models.author import Author
from models.category import Category
from models.item import VISIBILITY_PRIVATE, VISIBILITY_PUBLIC, Item
from models.location import Location
from utils.access import Identity
from utils.pagination import PageParams

RECENT_ITEMS = 5


def get_stats(db: Session, identity: Identity) -> Dict[str, Any]:
    """Counts over the caller's own rows plus their most recently updated items."""
    def count(model, *clauses) -> int:
        return db.query(func.count(model.id)).filter(model.user_id == identity.user_id, *clauses).scalar() or 0

    recent = items_crud.list_items(
        db,
        identity,
        items_crud.ItemFilters(user_id=identity.user_id),
        PageParams(limit=RECENT_ITEMS),
    )
    return {
        "total_items": count(Item),
        "public_items": count(Item, Item.visibility == VISIBILITY_PUBLIC),
        "private_items": count(Item, Item.visibility == VISIBILITY_PRIVATE),
        "categories": count(Category),
        "locations": count(Location),
        "authors": count(Author),
        "recent_items": recent.items,
    }
