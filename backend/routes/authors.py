# backend/routes/authors.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from crud import authors_crud
from database import get_db
from schemas.common import MessageResponse, Paginated
from schemas.author import AuthorCreate, AuthorOut, AuthorUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.pagination import PageParams, page_params
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Authors"])


@router.get("/authors", response_model=Union[Paginated[AuthorOut], List[AuthorOut]])
def list_authors(
    search: Optional[str] = Query(None),
    page: Optional[PageParams] = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    result = authors_crud.list_authors(db, identity, search=search, params=page)
    if page is None:
        return [AuthorOut.model_validate(row) for row in result]
    return Paginated[AuthorOut].from_page(result, [AuthorOut.model_validate(row) for row in result.items])


@router.get("/authors/{author_id}", response_model=AuthorOut)
def get_author(
    author_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return authors_crud.get_author(db, identity, author_id)


@router.post("/authors", response_model=AuthorOut, status_code=status.HTTP_201_CREATED)
def create_author(
    payload: AuthorCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = authors_crud.create_author(db, identity, payload)
    write_log(
        db, user_id=identity.user_id, action="AUTHOR_CREATE", resource="authors",
        ip=client_ip(request), meta={"id": row.id},
    )
    return row


@router.put("/authors/{author_id}", response_model=AuthorOut)
def update_author(
    author_id: int,
    payload: AuthorUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = authors_crud.update_author(db, identity, author_id, payload)
    write_log(
        db, user_id=identity.user_id, action="AUTHOR_UPDATE", resource="authors",
        ip=client_ip(request), meta={"id": author_id},
    )
    return row


@router.delete("/authors/{author_id}", response_model=MessageResponse)
def delete_author(
    author_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    authors_crud.delete_author(db, identity, author_id)
    write_log(
        db, user_id=identity.user_id, action="AUTHOR_DELETE", resource="authors",
        ip=client_ip(request), meta={"id": author_id},
    )
    return {"message": "Author deleted"}
