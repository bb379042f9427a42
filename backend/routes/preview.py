# backend/routes/preview.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crud import contents_crud, items_crud, upload_files_crud
from database import get_db
from schemas.content import ContentOut
from schemas.item import ItemPreview, ItemPreviewResponse
from utils.access import Identity
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import get_optional_identity

router = APIRouter(prefix="/preview", tags=["Preview"])


# Same access rule as GET /items/{id}: owner, public, then whitelisted email
@router.get("/{item_id}", response_model=ItemPreviewResponse)
def preview_item(
    item_id: int,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Optional[Identity] = Depends(get_optional_identity),
):
    item = items_crud.get_item(db, identity, item_id)
    urls = upload_files_crud.image_urls(db, [item], storage)
    preview = ItemPreview.model_validate(item).model_copy(update={
        "image_urls": urls.get(item.id, []),
        "contents": [ContentOut.model_validate(c) for c in contents_crud.list_for_item(db, item.id)],
    })
    return {"data": preview}
