# backend/crud/contents_crud.py
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from crud import items_crud
from models.content import Content
from schemas.content import ContentCreate, ContentUpdate, normalize_content_data
from utils.access import Identity
from utils.errors import NotFound, ValidationFailed


# Contents carry no owner column; every check goes through the parent item
def _find(db: Session, content_id: int) -> Content:
    content = db.query(Content).filter(Content.id == content_id).first()
    if content is None:
        raise NotFound("Content not found")
    return content


def list_for_item(db: Session, item_id: int) -> List[Content]:
    return (
        db.query(Content)
        .filter(Content.item_id == item_id)
        .order_by(Content.created_at.asc(), Content.id.asc())
        .all()
    )


def get_content(db: Session, identity: Optional[Identity], content_id: int) -> Content:
    content = _find(db, content_id)
    items_crud.get_item(db, identity, content.item_id)
    return content


def create_content(db: Session, identity: Identity, item_id: int, payload: ContentCreate) -> Content:
    item = items_crud.get_owned_item(db, identity, item_id)
    content = Content(item_id=item.id, type=payload.type, data=payload.data)
    db.add(content)
    db.commit()
    db.refresh(content)
    return content


def update_content(db: Session, identity: Identity, content_id: int, payload: ContentUpdate) -> Content:
    content = _find(db, content_id)
    items_crud.get_owned_item(db, identity, content.item_id)

    content_type = payload.type or content.type
    data = payload.data if payload.data is not None else content.data
    try:
        data = normalize_content_data(content_type, data)
    except ValidationError as e:
        details = [
            {"field": ".".join(str(part) for part in err["loc"]) or "data", "message": err["msg"]}
            for err in e.errors()
        ]
        raise ValidationFailed("Invalid content data", details=details)

    content.type = content_type
    content.data = data
    db.commit()
    db.refresh(content)
    return content


def delete_content(db: Session, identity: Identity, content_id: int) -> None:
    content = _find(db, content_id)
    items_crud.get_owned_item(db, identity, content.item_id)
    db.delete(content)
    db.commit()


def delete_for_item(db: Session, item_id: int) -> int:
    return db.query(Content).filter(Content.item_id == item_id).delete(synchronize_session=False)
