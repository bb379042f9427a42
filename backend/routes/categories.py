# backend/routes/categories.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from crud import categories_crud
from database import get_db
from schemas.common import MessageResponse, Paginated
from schemas.category import CategoryCreate, CategoryOut, CategoryUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.pagination import PageParams, page_params
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Categories"])


@router.get("/categories", response_model=Union[Paginated[CategoryOut], List[CategoryOut]])
def list_categories(
    search: Optional[str] = Query(None),
    page: Optional[PageParams] = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    result = categories_crud.list_categories(db, identity, search=search, params=page)
    if page is None:
        return [CategoryOut.model_validate(row) for row in result]
    return Paginated[CategoryOut].from_page(result, [CategoryOut.model_validate(row) for row in result.items])


@router.get("/categories/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return categories_crud.get_category(db, identity, category_id)


@router.post("/categories", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = categories_crud.create_category(db, identity, payload)
    write_log(
        db, user_id=identity.user_id, action="CATEGORY_CREATE", resource="categories",
        ip=client_ip(request), meta={"id": row.id},
    )
    return row


@router.put("/categories/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = categories_crud.update_category(db, identity, category_id, payload)
    write_log(
        db, user_id=identity.user_id, action="CATEGORY_UPDATE", resource="categories",
        ip=client_ip(request), meta={"id": category_id},
    )
    return row


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    categories_crud.delete_category(db, identity, category_id)
    write_log(
        db, user_id=identity.user_id, action="CATEGORY_DELETE", resource="categories",
        ip=client_ip(request), meta={"id": category_id},
    )
    return {"message": "Category deleted"}
