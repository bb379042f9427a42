# backend/crud/positions_crud.py
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session, joinedload

from crud.base import Resource, delete_row, get_owned, get_readable, update_row
from models.position import Position
from models.position_schema import PositionSchema
from schemas.position import PositionCreate, PositionInput, PositionUpdate
from utils.access import Identity
from utils.errors import ValidationFailed
from utils.pagination import SortKey

RESOURCE = Resource(
    model=Position,
    label="Position",
    sort=SortKey(Position.created_at, Position.id),
)


def check_schemas(db: Session, identity: Identity, inputs: Sequence[PositionInput]) -> None:
    """Every referenced position schema must exist and belong to the caller."""
    wanted = {entry.position_schema_id for entry in inputs}
    if not wanted:
        return
    owned = {
        row.id
        for row in db.query(PositionSchema.id).filter(
            PositionSchema.id.in_(wanted), PositionSchema.user_id == identity.user_id
        )
    }
    missing = sorted(wanted - owned)
    if missing:
        raise ValidationFailed.for_field("positionSchemaId", f"Position schema not found: {missing[0]}")


def list_for_item(db: Session, item_id: int) -> List[Position]:
    return (
        db.query(Position)
        .options(joinedload(Position.position_schema))
        .filter(Position.item_id == item_id)
        .order_by(Position.created_at.asc(), Position.id.asc())
        .all()
    )


def add_for_item(db: Session, identity: Identity, item_id: int, inputs: Sequence[PositionInput]) -> None:
    # Caller commits
    for entry in inputs:
        db.add(Position(
            user_id=identity.user_id,
            item_id=item_id,
            position_schema_id=entry.position_schema_id,
            data=entry.data,
        ))


def replace_for_item(db: Session, identity: Identity, item_id: int, inputs: Sequence[PositionInput]) -> None:
    delete_for_item(db, item_id)
    add_for_item(db, identity, item_id, inputs)


def delete_for_item(db: Session, item_id: int) -> int:
    return db.query(Position).filter(Position.item_id == item_id).delete(synchronize_session=False)


def get_position(db: Session, identity: Optional[Identity], position_id: int) -> Position:
    return get_readable(db, RESOURCE, identity, position_id)


def create_position(db: Session, identity: Identity, item_id: int, payload: PositionCreate) -> Position:
    check_schemas(db, identity, [payload])
    position = Position(
        user_id=identity.user_id,
        item_id=item_id,
        position_schema_id=payload.position_schema_id,
        data=payload.data,
    )
    db.add(position)
    db.commit()
    db.refresh(position)
    return position


def update_position(db: Session, identity: Identity, position_id: int, payload: PositionUpdate) -> Position:
    position = get_owned(db, RESOURCE, identity, position_id)
    values = payload.model_dump(exclude_unset=True)
    if values.get("position_schema_id") is not None:
        check_schemas(db, identity, [PositionInput(position_schema_id=values["position_schema_id"])])
    return update_row(db, position, values)


def delete_position(db: Session, identity: Identity, position_id: int) -> None:
    position = get_owned(db, RESOURCE, identity, position_id)
    delete_row(db, position)
