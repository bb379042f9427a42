# backend/routes/stock_history.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from crud import items_crud, stock_history_crud
from database import get_db
from schemas.common import MessageResponse
from schemas.stock_history import StockHistoryCreate, StockHistoryList, StockHistoryOut
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Stock history"])


@router.get("/items/{item_id}/stock-history", response_model=StockHistoryList)
def list_stock_history(
    item_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    return {
        "entries": stock_history_crud.list_for_item(db, item.id),
        "quantity": stock_history_crud.get_quantity(db, item.id),
    }


@router.post("/items/{item_id}/stock-history", response_model=StockHistoryOut, status_code=status.HTTP_201_CREATED)
def add_stock_history(
    item_id: int,
    payload: StockHistoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item = items_crud.get_owned_item(db, identity, item_id)
    entry = stock_history_crud.create_entry(db, identity, item.id, payload)
    write_log(
        db, user_id=identity.user_id, action="STOCK_HISTORY_ADD", resource="stock_history",
        ip=client_ip(request), meta={"item_id": item_id, "quantity": payload.quantity},
    )
    return entry


@router.delete("/stock-history/{entry_id}", response_model=MessageResponse)
def delete_stock_history(
    entry_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    item_id = stock_history_crud.delete_entry(db, identity, entry_id)
    write_log(
        db, user_id=identity.user_id, action="STOCK_HISTORY_DELETE", resource="stock_history",
        ip=client_ip(request), meta={"entry_id": entry_id, "item_id": item_id},
    )
    return {"message": "Stock history entry deleted"}
