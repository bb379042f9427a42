# backend/crud/locations_crud.py
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from crud.base import (
    Resource, create_row, delete_row, detach_references, get_owned, get_readable, list_rows, update_row,
)
from models.item import Item
from models.location import Location
from schemas.location import LocationCreate, LocationUpdate
from utils.access import Identity
from utils.pagination import Page, PageParams, SortKey, decode_text

RESOURCE = Resource(
    model=Location,
    label="Location",
    sort=SortKey(Location.title, Location.id, decode=decode_text),
    search_columns=(Location.title,),
)


def list_locations(
    db: Session, identity: Optional[Identity], search: Optional[str] = None, params: Optional[PageParams] = None
) -> Union[List[Location], Page]:
    return list_rows(db, RESOURCE, identity, search=search, params=params)


def get_location(db: Session, identity: Optional[Identity], location_id: int) -> Location:
    return get_readable(db, RESOURCE, identity, location_id)


def create_location(db: Session, identity: Identity, payload: LocationCreate) -> Location:
    return create_row(db, RESOURCE, identity, payload.model_dump())


def update_location(db: Session, identity: Identity, location_id: int, payload: LocationUpdate) -> Location:
    location = get_owned(db, RESOURCE, identity, location_id)
    return update_row(db, location, payload.model_dump(exclude_unset=True))


def delete_location(db: Session, identity: Identity, location_id: int) -> None:
    location = get_owned(db, RESOURCE, identity, location_id)
    detach_references(db, Item.location_id, location.id)
    delete_row(db, location)
