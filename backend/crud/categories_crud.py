# backend/crud/categories_crud.py
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from crud.base import (
    Resource, create_row, delete_row, detach_references, get_owned, get_readable, list_rows, update_row,
)
from models.category import Category
from models.item import Item
from schemas.category import CategoryCreate, CategoryUpdate
from utils.access import Identity
from utils.pagination import Page, PageParams, SortKey, decode_text

RESOURCE = Resource(
    model=Category,
    label="Category",
    sort=SortKey(Category.name, Category.id, decode=decode_text),
    search_columns=(Category.name, Category.description),
)


def list_categories(
    db: Session, identity: Optional[Identity], search: Optional[str] = None, params: Optional[PageParams] = None
) -> Union[List[Category], Page]:
    return list_rows(db, RESOURCE, identity, search=search, params=params)


def get_category(db: Session, identity: Optional[Identity], category_id: int) -> Category:
    return get_readable(db, RESOURCE, identity, category_id)


def create_category(db: Session, identity: Identity, payload: CategoryCreate) -> Category:
    return create_row(db, RESOURCE, identity, payload.model_dump())


def update_category(db: Session, identity: Identity, category_id: int, payload: CategoryUpdate) -> Category:
    category = get_owned(db, RESOURCE, identity, category_id)
    return update_row(db, category, payload.model_dump(exclude_unset=True))


# Items keep existing with category_id set to NULL
def delete_category(db: Session, identity: Identity, category_id: int) -> None:
    category = get_owned(db, RESOURCE, identity, category_id)
    detach_references(db, Item.category_id, category.id)
    delete_row(db, category)
