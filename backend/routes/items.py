# backend/routes/items.py
from typing import List, Optional, Tuple, Union

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from crud import contents_crud, deletion_crud, items_crud, positions_crud, stock_history_crud, upload_files_crud
from database import get_db
from models.item import Item
from schemas.common import MessageResponse, Paginated
from schemas.content import ContentOut
from schemas.item import ItemCreate, ItemDetail, ItemOut, ItemUpdate, ParentUpdate
from schemas.position import PositionOut
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.errors import ValidationFailed
from utils.pagination import PageParams, page_params
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import get_current_identity, get_optional_identity

router = APIRouter(tags=["Items"])


# ---- HELPERS ----
def serialize_items(db: Session, storage: LocalObjectStore, items: List[Item]) -> List[ItemOut]:
    urls = upload_files_crud.image_urls(db, items, storage)
    return [
        ItemOut.model_validate(item).model_copy(update={"image_urls": urls.get(item.id, [])})
        for item in items
    ]


def _detail(db: Session, storage: LocalObjectStore, identity: Optional[Identity], item: Item) -> ItemDetail:
    urls = upload_files_crud.image_urls(db, [item], storage)
    children = items_crud.get_children(db, identity, item)
    return ItemDetail.model_validate(item).model_copy(update={
        "image_urls": urls.get(item.id, []),
        "children": serialize_items(db, storage, children),
        "contents": [ContentOut.model_validate(c) for c in contents_crud.list_for_item(db, item.id)],
        "positions": [PositionOut.model_validate(p) for p in positions_crud.list_for_item(db, item.id)],
        "quantity": stock_history_crud.get_quantity(db, item.id),
    })


def _parent_filter(raw: Optional[str], root_only: bool) -> Tuple[Optional[int], bool]:
    if raw is None or raw == "":
        return None, root_only
    if raw.strip().lower() == "null":
        return None, True
    try:
        return int(raw), root_only
    except ValueError:
        raise ValidationFailed.for_field("parentId", "Must be an item id or null")


# =========================
# ITEM LIST
# =========================
@router.get("/items", response_model=Union[Paginated[ItemOut], List[ItemOut]])
def list_items(
    search: Optional[str] = Query(None),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    location_id: Optional[int] = Query(None, alias="locationId"),
    author_id: Optional[int] = Query(None, alias="authorId"),
    # An id, or the literal "null" for root items
    parent_id: Optional[str] = Query(None, alias="parentId"),
    root_only: bool = Query(False, alias="rootOnly"),
    visibility: Optional[str] = Query(None),
    page: Optional[PageParams] = Depends(page_params),
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    parent, root_only = _parent_filter(parent_id, root_only)
    filters = items_crud.ItemFilters(
        category_id=category_id,
        location_id=location_id,
        author_id=author_id,
        parent_id=parent,
        root_only=root_only,
        visibility=visibility,
        search=search,
    )
    result = items_crud.list_items(db, identity, filters, page)
    if page is None:
        return serialize_items(db, storage, result)
    return Paginated[ItemOut].from_page(result, serialize_items(db, storage, result.items))


# =========================
# SINGLE ITEM
# =========================
@router.get("/items/{item_id}", response_model=ItemDetail)
def get_item(
    item_id: int,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    item = items_crud.get_item(db, identity, item_id)
    return _detail(db, storage, identity, item)


@router.post("/items", response_model=ItemDetail, status_code=status.HTTP_201_CREATED)
def create_item(
    payload: ItemCreate,
    request: Request,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.create_item(db, identity, payload, storage)
    write_log(
        db, user_id=identity.user_id, action="ITEM_CREATE", resource="items",
        ip=client_ip(request), meta={"item_id": item.id},
    )
    return _detail(db, storage, identity, item)


@router.put("/items/{item_id}", response_model=ItemDetail)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    request: Request,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.update_item(db, identity, item_id, payload, storage)
    write_log(
        db, user_id=identity.user_id, action="ITEM_UPDATE", resource="items",
        ip=client_ip(request), meta={"item_id": item.id, "fields": sorted(payload.model_fields_set)},
    )
    return _detail(db, storage, identity, item)


@router.put("/items/{item_id}/parent", response_model=ItemOut)
def set_item_parent(
    item_id: int,
    payload: ParentUpdate,
    request: Request,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.set_parent(db, identity, item_id, payload.parent_id)
    write_log(
        db, user_id=identity.user_id, action="ITEM_SET_PARENT", resource="items",
        ip=client_ip(request), meta={"item_id": item.id, "parent_id": payload.parent_id},
    )
    return serialize_items(db, storage, [item])[0]


@router.delete("/items/{item_id}", response_model=MessageResponse)
def delete_item(
    item_id: int,
    request: Request,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    deletion_crud.delete_item(db, identity, item_id, storage)
    write_log(
        db, user_id=identity.user_id, action="ITEM_DELETE", resource="items",
        ip=client_ip(request), meta={"item_id": item_id},
    )
    return {"message": "Item deleted"}
