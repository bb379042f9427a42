# backend/routes/position_schemas.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from crud import position_schemas_crud
from database import get_db
from schemas.common import MessageResponse, Paginated
from schemas.position_schema import PositionSchemaCreate, PositionSchemaOut, PositionSchemaUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.pagination import PageParams, page_params
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Position schemas"])


@router.get("/position-schemas", response_model=Union[Paginated[PositionSchemaOut], List[PositionSchemaOut]])
def list_position_schemas(
    search: Optional[str] = Query(None),
    page: Optional[PageParams] = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    result = position_schemas_crud.list_position_schemas(db, identity, search=search, params=page)
    if page is None:
        return [PositionSchemaOut.model_validate(row) for row in result]
    return Paginated[PositionSchemaOut].from_page(result, [PositionSchemaOut.model_validate(row) for row in result.items])


@router.get("/position-schemas/{schema_id}", response_model=PositionSchemaOut)
def get_position_schema(
    schema_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return position_schemas_crud.get_position_schema(db, identity, schema_id)


@router.post("/position-schemas", response_model=PositionSchemaOut, status_code=status.HTTP_201_CREATED)
def create_position_schema(
    payload: PositionSchemaCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = position_schemas_crud.create_position_schema(db, identity, payload)
    write_log(
        db, user_id=identity.user_id, action="POSITION_SCHEMA_CREATE", resource="position_schemas",
        ip=client_ip(request), meta={"id": row.id},
    )
    return row


@router.put("/position-schemas/{schema_id}", response_model=PositionSchemaOut)
def update_position_schema(
    schema_id: int,
    payload: PositionSchemaUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = position_schemas_crud.update_position_schema(db, identity, schema_id, payload)
    write_log(
        db, user_id=identity.user_id, action="POSITION_SCHEMA_UPDATE", resource="position_schemas",
        ip=client_ip(request), meta={"id": schema_id},
    )
    return row


@router.delete("/position-schemas/{schema_id}", response_model=MessageResponse)
def delete_position_schema(
    schema_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    position_schemas_crud.delete_position_schema(db, identity, schema_id)
    write_log(
        db, user_id=identity.user_id, action="POSITION_SCHEMA_DELETE", resource="position_schemas",
        ip=client_ip(request), meta={"id": schema_id},
    )
    return {"message": "Position schema deleted"}
