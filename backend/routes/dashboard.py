# backend/routes/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crud import dashboard_crud
from database import get_db
from routes.items import serialize_items
from schemas.dashboard import DashboardStats
from utils.access import Identity
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import get_current_identity

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    stats = dashboard_crud.get_stats(db, identity)
    stats["recent_items"] = serialize_items(db, storage, stats["recent_items"])
    return stats
