# backend/routes/whitelist.py
from typing import List

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from crud import items_crud, whitelist_crud
from database import get_db
from schemas.common import MessageResponse
from schemas.whitelist import WhitelistBulkCreate, WhitelistBulkResult, WhitelistCreate, WhitelistOut
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Whitelist"])


# Every whitelist operation is reserved to the item owner
@router.get("/items/{item_id}/whitelist", response_model=List[WhitelistOut])
def list_whitelist(
    item_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    return whitelist_crud.list_entries(db, item.id)


@router.post("/items/{item_id}/whitelist", response_model=WhitelistOut, status_code=status.HTTP_201_CREATED)
def add_to_whitelist(
    item_id: int,
    payload: WhitelistCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    entry = whitelist_crud.add(db, item.id, payload.email)
    write_log(
        db, user_id=identity.user_id, action="WHITELIST_ADD", resource="whitelist",
        ip=client_ip(request), meta={"item_id": item_id, "entry_id": entry.id},
    )
    return entry


@router.post("/items/{item_id}/whitelist/bulk", response_model=WhitelistBulkResult, status_code=status.HTTP_201_CREATED)
def bulk_add_to_whitelist(
    item_id: int,
    payload: WhitelistBulkCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    added = whitelist_crud.bulk_add(db, item.id, payload.emails)
    write_log(
        db, user_id=identity.user_id, action="WHITELIST_BULK_ADD", resource="whitelist",
        ip=client_ip(request), meta={"item_id": item_id, "added": added},
    )
    return {"added": added}


@router.delete("/items/{item_id}/whitelist/{entry_id}", response_model=MessageResponse)
def remove_from_whitelist(
    item_id: int,
    entry_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    whitelist_crud.remove(db, item.id, entry_id)
    write_log(
        db, user_id=identity.user_id, action="WHITELIST_REMOVE", resource="whitelist",
        ip=client_ip(request), meta={"item_id": item_id, "entry_id": entry_id},
    )
    return {"message": "Whitelist entry removed"}
