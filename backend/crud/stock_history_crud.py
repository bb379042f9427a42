# backend/crud/stock_history_crud.py
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from crud.base import Resource, delete_row, get_owned
from models.stock_history import StockHistory
from schemas.stock_history import StockHistoryCreate
from utils.access import Identity
from utils.pagination import SortKey

RESOURCE = Resource(
    model=StockHistory,
    label="Stock history entry",
    sort=SortKey(StockHistory.created_at, StockHistory.id, descending=True),
)


# Current quantity is never stored, always derived
def get_quantity(db: Session, item_id: int) -> int:
    total = (
        db.query(func.coalesce(func.sum(StockHistory.quantity), 0))
        .filter(StockHistory.item_id == item_id)
        .scalar()
    )
    return int(total or 0)


def list_for_item(db: Session, item_id: int) -> List[StockHistory]:
    return (
        db.query(StockHistory)
        .filter(StockHistory.item_id == item_id)
        .order_by(*RESOURCE.sort.order_by())
        .all()
    )


def create_entry(db: Session, identity: Identity, item_id: int, payload: StockHistoryCreate) -> StockHistory:
    entry = StockHistory(user_id=identity.user_id, item_id=item_id, quantity=payload.quantity, note=payload.note)
    db.add(entry)
    db.commit()
    db.refresh(entry)
    return entry


def delete_entry(db: Session, identity: Identity, entry_id: int) -> int:
    """Deletes the entry and returns the id of its item."""
    entry = get_owned(db, RESOURCE, identity, entry_id)
    item_id = entry.item_id
    delete_row(db, entry)
    return item_id


def delete_for_item(db: Session, item_id: int) -> int:
    return db.query(StockHistory).filter(StockHistory.item_id == item_id).delete(synchronize_session=False)
