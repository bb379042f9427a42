# backend/crud/position_schemas_crud.py
from typing import List, Optional, Union

from sqlalchemy.orm import Session

from crud.base import Resource, create_row, delete_row, get_owned, get_readable, list_rows, update_row
from models.position import Position
from models.position_schema import PositionSchema
from schemas.position_schema import PositionSchemaCreate, PositionSchemaUpdate
from utils.access import Identity
from utils.pagination import Page, PageParams, SortKey, decode_text

RESOURCE = Resource(
    model=PositionSchema,
    label="Position schema",
    sort=SortKey(PositionSchema.name, PositionSchema.id, decode=decode_text),
    search_columns=(PositionSchema.name,),
)


def list_position_schemas(
    db: Session, identity: Optional[Identity], search: Optional[str] = None, params: Optional[PageParams] = None
) -> Union[List[PositionSchema], Page]:
    return list_rows(db, RESOURCE, identity, search=search, params=params)


def get_position_schema(db: Session, identity: Optional[Identity], schema_id: int) -> PositionSchema:
    return get_readable(db, RESOURCE, identity, schema_id)


# by_alias maps the schema_ field back onto the "schema" column
def create_position_schema(db: Session, identity: Identity, payload: PositionSchemaCreate) -> PositionSchema:
    values = payload.model_dump(by_alias=True)
    return create_row(db, RESOURCE, identity, {"name": values["name"], "schema": values["schema"]})


def update_position_schema(
    db: Session, identity: Identity, schema_id: int, payload: PositionSchemaUpdate
) -> PositionSchema:
    position_schema = get_owned(db, RESOURCE, identity, schema_id)
    values = payload.model_dump(exclude_unset=True, by_alias=True)
    if values.get("schema", {}) is None:
        values.pop("schema")
    return update_row(db, position_schema, values)


# Positions cannot exist without their schema, so they go with it
def delete_position_schema(db: Session, identity: Identity, schema_id: int) -> None:
    position_schema = get_owned(db, RESOURCE, identity, schema_id)
    db.query(Position).filter(Position.position_schema_id == position_schema.id).delete(synchronize_session=False)
    delete_row(db, position_schema)
