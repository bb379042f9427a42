# backend/routes/positions.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from crud import items_crud, positions_crud
from database import get_db
from schemas.common import MessageResponse
from schemas.position import PositionCreate, PositionOut, PositionUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_identity, get_optional_identity

router = APIRouter(tags=["Positions"])


# Readable wherever the item is readable
@router.get("/items/{item_id}/positions", response_model=List[PositionOut])
def list_item_positions(
    item_id: int,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    item = items_crud.get_item(db, identity, item_id)
    return positions_crud.list_for_item(db, item.id)


@router.post("/items/{item_id}/positions", response_model=PositionOut, status_code=status.HTTP_201_CREATED)
def create_position(
    item_id: int,
    payload: PositionCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    position = positions_crud.create_position(db, identity, item.id, payload)
    write_log(
        db, user_id=identity.user_id, action="POSITION_CREATE", resource="positions",
        ip=client_ip(request), meta={"item_id": item_id, "position_id": position.id},
    )
    return position


@router.get("/positions/{position_id}", response_model=PositionOut)
def get_position(
    position_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return positions_crud.get_position(db, identity, position_id)


@router.put("/positions/{position_id}", response_model=PositionOut)
def update_position(
    position_id: int,
    payload: PositionUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    position = positions_crud.update_position(db, identity, position_id, payload)
    write_log(
        db, user_id=identity.user_id, action="POSITION_UPDATE", resource="positions",
        ip=client_ip(request), meta={"position_id": position_id},
    )
    return position


@router.delete("/positions/{position_id}", response_model=MessageResponse)
def delete_position(
    position_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    positions_crud.delete_position(db, identity, position_id)
    write_log(
        db, user_id=identity.user_id, action="POSITION_DELETE", resource="positions",
        ip=client_ip(request), meta={"position_id": position_id},
    )
    return {"message": "Position deleted"}
