# backend/routes/qrcode.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config import settings
from crud import items_crud
from database import get_db
from schemas.qrcode import QrScanRequest, QrScanResult
from utils.access import Identity
from utils.tokenJWT import get_optional_identity

router = APIRouter(prefix="/qrcode", tags=["QRCode"])


# Resolves a preview URL (".../preview/item/{id}") or a stored original QR code to the item API URL
@router.post("/scan", response_model=QrScanResult)
def scan_qr_code(
    payload: QrScanRequest,
    db: Session = Depends(get_db),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    item = items_crud.resolve_qr_content(db, identity, payload.qrcontent)
    return {"type": "item", "url": f"{settings.PUBLIC_URL.rstrip('/')}/api/v1/items/{item.id}"}
