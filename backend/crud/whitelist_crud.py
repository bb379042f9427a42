# backend/crud/whitelist_crud.py
from typing import Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.item_whitelist import ItemWhitelist
from utils.errors import NotFound, ValidationFailed


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_whitelisted(db: Session, item_id: int, email: str) -> bool:
    normalized = normalize_email(email)
    if not normalized:
        return False
    return (
        db.query(ItemWhitelist.id)
        .filter(ItemWhitelist.item_id == item_id, ItemWhitelist.email == normalized)
        .first()
        is not None
    )


def list_entries(db: Session, item_id: int) -> List[ItemWhitelist]:
    return (
        db.query(ItemWhitelist)
        .filter(ItemWhitelist.item_id == item_id)
        .order_by(ItemWhitelist.email.asc(), ItemWhitelist.id.asc())
        .all()
    )


def _find(db: Session, item_id: int, normalized: str):
    return (
        db.query(ItemWhitelist)
        .filter(ItemWhitelist.item_id == item_id, ItemWhitelist.email == normalized)
        .first()
    )


def add(db: Session, item_id: int, email: str) -> ItemWhitelist:
    """Idempotent: an already present email returns the existing entry."""
    normalized = normalize_email(email)
    if not normalized:
        raise ValidationFailed.for_field("email", "Email is required")

    existing = _find(db, item_id, normalized)
    if existing is not None:
        return existing

    entry = ItemWhitelist(item_id=item_id, email=normalized)
    db.add(entry)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent insert of the same email
        db.rollback()
        existing = _find(db, item_id, normalized)
        if existing is None:
            raise
        return existing
    db.refresh(entry)
    return entry


def bulk_add(db: Session, item_id: int, emails: Iterable[str]) -> int:
    """Returns the number of newly inserted entries; duplicates and blanks are skipped."""
    wanted = []
    for email in emails:
        normalized = normalize_email(email)
        if normalized and normalized not in wanted:
            wanted.append(normalized)
    if not wanted:
        return 0

    present = {
        row.email
        for row in db.query(ItemWhitelist.email).filter(
            ItemWhitelist.item_id == item_id, ItemWhitelist.email.in_(wanted)
        )
    }
    fresh = [email for email in wanted if email not in present]
    for email in fresh:
        db.add(ItemWhitelist(item_id=item_id, email=email))
    try:
        db.commit()
    except IntegrityError:
        # Fall back to one-by-one inserts so concurrent duplicates are skipped
        db.rollback()
        added = 0
        for email in fresh:
            if _find(db, item_id, email) is None:
                add(db, item_id, email)
                added += 1
        return added
    return len(fresh)


def remove(db: Session, item_id: int, entry_id: int) -> None:
    entry = (
        db.query(ItemWhitelist)
        .filter(ItemWhitelist.id == entry_id, ItemWhitelist.item_id == item_id)
        .first()
    )
    if entry is None:
        raise NotFound("Whitelist entry not found")
    db.delete(entry)
    db.commit()


def delete_for_item(db: Session, item_id: int) -> int:
    return (
        db.query(ItemWhitelist)
        .filter(ItemWhitelist.item_id == item_id)
        .delete(synchronize_session=False)
    )
