# backend/crud/items_crud.py
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session, joinedload

from crud import positions_crud, upload_files_crud, whitelist_crud
from crud.base import Resource, check_not_null, get_owned, get_readable, list_rows
from database import utcnow
from models.author import Author
from models.category import Category
from models.item import Item
from models.location import Location
from schemas.item import ItemCreate, ItemUpdate
from utils.access import Identity, direct_access_decision
from utils.errors import ValidationFailed
from utils.pagination import Page, PageParams, SortKey, decode_datetime, encode_datetime
from utils.storage import LocalObjectStore

RESOURCE = Resource(
    model=Item,
    label="Item",
    sort=SortKey(
        Item.updated_at,
        Item.id,
        descending=True,
        encode=encode_datetime,
        decode=decode_datetime,
    ),
    search_columns=(Item.title, Item.description),
    load_options=(
        joinedload(Item.category),
        joinedload(Item.location),
        joinedload(Item.author),
    ),
    whitelist=whitelist_crud.is_whitelisted,
)

# (payload field, model, wire name) for owned lookup references
LOOKUP_REFERENCES = (
    ("category_id", Category, "categoryId"),
    ("location_id", Location, "locationId"),
    ("author_id", Author, "authorId"),
)

PREVIEW_URL_RE = re.compile(r"(?:^|/)preview/item/(\d+)(?:$|[?#/])")


@dataclass
class ItemFilters:
    category_id: Optional[int] = None
    location_id: Optional[int] = None
    author_id: Optional[int] = None
    parent_id: Optional[int] = None
    # Only items without a parent
    root_only: bool = False
    visibility: Optional[str] = None
    search: Optional[str] = None
    # Narrow to one owner; the visibility clause still applies
    user_id: Optional[str] = None

    def clauses(self) -> List[Any]:
        clauses = []
        if self.category_id is not None:
            clauses.append(Item.category_id == self.category_id)
        if self.location_id is not None:
            clauses.append(Item.location_id == self.location_id)
        if self.author_id is not None:
            clauses.append(Item.author_id == self.author_id)
        if self.parent_id is not None:
            clauses.append(Item.parent_id == self.parent_id)
        elif self.root_only:
            clauses.append(Item.parent_id.is_(None))
        if self.visibility:
            clauses.append(Item.visibility == self.visibility)
        if self.user_id is not None:
            clauses.append(Item.user_id == self.user_id)
        return clauses


# ---- READS ----
def list_items(
    db: Session,
    identity: Optional[Identity],
    filters: Optional[ItemFilters] = None,
    params: Optional[PageParams] = None,
) -> Union[List[Item], Page]:
    filters = filters or ItemFilters()
    return list_rows(db, RESOURCE, identity, filters=filters.clauses(), search=filters.search, params=params)


def get_item(db: Session, identity: Optional[Identity], item_id: int) -> Item:
    return get_readable(db, RESOURCE, identity, item_id)


def get_owned_item(db: Session, identity: Optional[Identity], item_id: int) -> Item:
    return get_owned(db, RESOURCE, identity, item_id)


def get_children(db: Session, identity: Optional[Identity], item: Item) -> List[Item]:
    """Children the caller could list; a whitelist on the parent does not extend to them."""
    return list_rows(db, RESOURCE, identity, filters=[Item.parent_id == item.id])


def find_by_qr_code(db: Session, qr_code: str) -> List[Item]:
    return (
        db.query(Item)
        .filter(Item.original_qr_code == qr_code)
        .order_by(Item.id.asc())
        .all()
    )


def resolve_qr_content(db: Session, identity: Optional[Identity], content: str) -> Item:
    """Item addressed by a scanned QR payload: a preview URL or a stored original code."""
    content = content.strip()
    match = PREVIEW_URL_RE.search(content)
    if match:
        item = db.query(Item).filter(Item.id == int(match.group(1))).first()
        if item is None:
            raise ValidationFailed("Invalid QR code")
        candidates = [item]
    else:
        candidates = find_by_qr_code(db, content)
        if not candidates:
            raise ValidationFailed("Invalid QR code")

    def whitelist_for(item):
        return lambda email: whitelist_crud.is_whitelisted(db, item.id, email)

    decisions = [(item, direct_access_decision(identity, item, whitelist_for(item))) for item in candidates]
    for item, decision in decisions:
        if decision.allow:
            return item
    decisions[0][1].raise_for_denial()


# ---- VALIDATION ----
def _check_lookups(db: Session, identity: Identity, values: Dict[str, Any]) -> None:
    for field, model, wire_name in LOOKUP_REFERENCES:
        ref_id = values.get(field)
        if ref_id is None:
            continue
        row = db.query(model).filter(model.id == ref_id).first()
        if row is None or row.user_id != identity.user_id:
            raise ValidationFailed.for_field(wire_name, f"{model.__name__} not found")


def _check_parent(db: Session, identity: Identity, item_id: Optional[int], parent_id: int) -> None:
    parent = db.query(Item).filter(Item.id == parent_id).first()
    if parent is None or parent.user_id != identity.user_id:
        raise ValidationFailed.for_field("parentId", "Parent item not found")
    if item_id is None:
        return
    if parent.id == item_id:
        raise ValidationFailed.for_field("parentId", "An item cannot be its own parent")

    # Walk up from the new parent; meeting the item means it would become its own ancestor
    seen = {parent.id}
    current = parent
    while current.parent_id is not None and current.parent_id not in seen:
        if current.parent_id == item_id:
            raise ValidationFailed.for_field("parentId", "An item cannot be moved under its own descendant")
        seen.add(current.parent_id)
        current = db.query(Item).filter(Item.id == current.parent_id).first()
        if current is None:
            break


def _validate(db: Session, identity: Identity, values: Dict[str, Any], item_id: Optional[int] = None) -> None:
    _check_lookups(db, identity, values)
    if values.get("parent_id") is not None:
        _check_parent(db, identity, item_id, values["parent_id"])


# ---- WRITES ----
def create_item(db: Session, identity: Identity, payload: ItemCreate, storage: LocalObjectStore) -> Item:
    values = payload.model_dump(exclude={"positions"})
    _validate(db, identity, values)
    file_ids = upload_files_crud.resolve_image_refs(db, identity, values["images"], storage)
    positions = payload.positions or []
    positions_crud.check_schemas(db, identity, positions)

    item = Item(user_id=identity.user_id, **values)
    db.add(item)
    db.flush()
    upload_files_crud.sync_item_files(db, item.id, file_ids)
    positions_crud.add_for_item(db, identity, item.id, positions)
    db.commit()
    db.refresh(item)
    return item


def update_item(
    db: Session, identity: Identity, item_id: int, payload: ItemUpdate, storage: LocalObjectStore
) -> Item:
    item = get_owned_item(db, identity, item_id)
    values = payload.model_dump(exclude_unset=True, exclude={"positions"})
    check_not_null(Item, values)
    _validate(db, identity, values, item_id=item.id)

    if "images" in values:
        file_ids = upload_files_crud.resolve_image_refs(db, identity, values["images"], storage, item_id=item.id)
        upload_files_crud.sync_item_files(db, item.id, file_ids)

    if payload.positions is not None:
        positions_crud.check_schemas(db, identity, payload.positions)
        positions_crud.replace_for_item(db, identity, item.id, payload.positions)

    for key, value in values.items():
        setattr(item, key, value)
    # Position-only edits still move the item to the top of the list
    item.updated_at = utcnow()
    db.commit()
    db.refresh(item)
    return item


def set_parent(db: Session, identity: Identity, item_id: int, parent_id: Optional[int]) -> Item:
    item = get_owned_item(db, identity, item_id)
    if parent_id is not None:
        _check_parent(db, identity, item.id, parent_id)
    item.parent_id = parent_id
    item.updated_at = utcnow()
    db.commit()
    db.refresh(item)
    return item
