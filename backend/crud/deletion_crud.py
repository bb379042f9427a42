# backend/crud/deletion_crud.py
"""Cascade deletion of items and whole accounts.

Database rows go children first: upload files, then positions, contents,
stock history and whitelist rows, then the item. Stored objects are removed
best-effort; a database failure rolls back and propagates so the caller can
retry the whole (idempotent) operation.
"""
import logging
from typing import Dict

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crud import contents_crud, items_crud, positions_crud, stock_history_crud, upload_files_crud, whitelist_crud
from models.author import Author
from models.category import Category
from models.item import Item
from models.location import Location
from models.position import Position
from models.position_schema import PositionSchema
from models.stock_history import StockHistory
from models.upload_file import UploadFile
from utils.access import Identity
from utils.storage import LocalObjectStore

logger = logging.getLogger(__name__)

LOOKUP_COLUMNS = (
    (Category, Item.category_id),
    (Location, Item.location_id),
    (Author, Item.author_id),
)


def _cascade_item(db: Session, storage: LocalObjectStore, item_id: int) -> None:
    files = db.query(UploadFile).filter(UploadFile.item_id == item_id).all()
    upload_files_crud.purge_files(db, storage, files)
    db.flush()
    positions_crud.delete_for_item(db, item_id)
    contents_crud.delete_for_item(db, item_id)
    stock_history_crud.delete_for_item(db, item_id)
    whitelist_crud.delete_for_item(db, item_id)
    # Children survive as root items
    db.query(Item).filter(Item.parent_id == item_id).update({Item.parent_id: None}, synchronize_session=False)
    db.query(Item).filter(Item.id == item_id).delete(synchronize_session=False)


def delete_item(db: Session, identity: Identity, item_id: int, storage: LocalObjectStore) -> None:
    item = items_crud.get_owned_item(db, identity, item_id)
    try:
        _cascade_item(db, storage, item.id)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Item %s deletion failed", item_id)
        raise


def delete_account(db: Session, user_id: str, storage: LocalObjectStore) -> Dict[str, int]:
    """Remove everything owned by ``user_id``; rerunning after a partial failure is safe."""
    counts = {}
    try:
        item_ids = [row.id for row in db.query(Item.id).filter(Item.user_id == user_id)]
        for item_id in item_ids:
            _cascade_item(db, storage, item_id)
        counts["items"] = len(item_ids)

        # Leftovers not attached to any of the user's items
        stray_files = db.query(UploadFile).filter(UploadFile.user_id == user_id).all()
        counts["files"] = upload_files_crud.purge_files(db, storage, stray_files)
        db.flush()
        counts["positions"] = (
            db.query(Position).filter(Position.user_id == user_id).delete(synchronize_session=False)
        )
        db.query(StockHistory).filter(StockHistory.user_id == user_id).delete(synchronize_session=False)

        for model, column in LOOKUP_COLUMNS:
            owned = select(model.id).where(model.user_id == user_id)
            db.query(Item).filter(column.in_(owned)).update(
                {column: None}, synchronize_session=False
            )
            counts[model.__tablename__] = (
                db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)
            )
        schema_ids = select(PositionSchema.id).where(PositionSchema.user_id == user_id)
        db.query(Position).filter(Position.position_schema_id.in_(schema_ids)).delete(
            synchronize_session=False
        )
        counts["position_schemas"] = (
            db.query(PositionSchema).filter(PositionSchema.user_id == user_id).delete(synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Account deletion failed for user %s", user_id)
        raise

    logger.info("Deleted account data for user %s: %s", user_id, counts)
    return counts
