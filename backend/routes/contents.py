# backend/routes/contents.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from crud import contents_crud, items_crud
from database import get_db
from schemas.common import MessageResponse
from schemas.content import ContentCreate, ContentOut, ContentUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_identity, get_optional_identity

router = APIRouter(tags=["Contents"])


@router.get("/items/{item_id}/contents", response_model=List[ContentOut])
def list_item_contents(
    item_id: int,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    item = items_crud.get_item(db, identity, item_id)
    return contents_crud.list_for_item(db, item.id)


@router.post("/items/{item_id}/contents", response_model=ContentOut, status_code=status.HTTP_201_CREATED)
def create_content(
    item_id: int,
    payload: ContentCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    content = contents_crud.create_content(db, identity, item_id, payload)
    write_log(
        db, user_id=identity.user_id, action="CONTENT_CREATE", resource="contents",
        ip=client_ip(request), meta={"item_id": item_id, "content_id": content.id},
    )
    return content


@router.get("/contents/{content_id}", response_model=ContentOut)
def get_content(
    content_id: int,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    return contents_crud.get_content(db, identity, content_id)


@router.put("/contents/{content_id}", response_model=ContentOut)
def update_content(
    content_id: int,
    payload: ContentUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    content = contents_crud.update_content(db, identity, content_id, payload)
    write_log(
        db, user_id=identity.user_id, action="CONTENT_UPDATE", resource="contents",
        ip=client_ip(request), meta={"content_id": content_id},
    )
    return content


@router.delete("/contents/{content_id}", response_model=MessageResponse)
def delete_content(
    content_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    contents_crud.delete_content(db, identity, content_id)
    write_log(
        db, user_id=identity.user_id, action="CONTENT_DELETE", resource="contents",
        ip=client_ip(request), meta={"content_id": content_id},
    )
    return {"message": "Content deleted"}
