# backend/crud/authors_crud.py
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from crud.base import (
    Resource, create_row, delete_row, detach_references, get_owned, get_readable, list_rows, update_row,
)
from models.author import Author
from models.item import Item
from schemas.author import AuthorCreate, AuthorUpdate
from utils.access import Identity
from utils.pagination import Page, PageParams, SortKey, decode_text

RESOURCE = Resource(
    model=Author,
    label="Author",
    sort=SortKey(Author.name, Author.id, decode=decode_text),
    search_columns=(Author.name, Author.bio),
)


def list_authors(
    db: Session, identity: Optional[Identity], search: Optional[str] = None, params: Optional[PageParams] = None
) -> Union[List[Author], Page]:
    return list_rows(db, RESOURCE, identity, search=search, params=params)


def get_author(db: Session, identity: Optional[Identity], author_id: int) -> Author:
    return get_readable(db, RESOURCE, identity, author_id)


def create_author(db: Session, identity: Identity, payload: AuthorCreate) -> Author:
    return create_row(db, RESOURCE, identity, payload.model_dump())


def update_author(db: Session, identity: Identity, author_id: int, payload: AuthorUpdate) -> Author:
    author = get_owned(db, RESOURCE, identity, author_id)
    return update_row(db, author, payload.model_dump(exclude_unset=True))


def delete_author(db: Session, identity: Identity, author_id: int) -> None:
    author = get_owned(db, RESOURCE, identity, author_id)
    detach_references(db, Item.author_id, author.id)
    delete_row(db, author)
