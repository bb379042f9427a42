# backend/routes/locations.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from crud import locations_crud
from database import get_db
from schemas.common import MessageResponse, Paginated
from schemas.location import LocationCreate, LocationOut, LocationUpdate
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.pagination import PageParams, page_params
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Locations"])


@router.get("/locations", response_model=Union[Paginated[LocationOut], List[LocationOut]])
def list_locations(
    search: Optional[str] = Query(None),
    page: Optional[PageParams] = Depends(page_params),
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    result = locations_crud.list_locations(db, identity, search=search, params=page)
    if page is None:
        return [LocationOut.model_validate(row) for row in result]
    return Paginated[LocationOut].from_page(result, [LocationOut.model_validate(row) for row in result.items])


@router.get("/locations/{location_id}", response_model=LocationOut)
def get_location(
    location_id: int,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    return locations_crud.get_location(db, identity, location_id)


@router.post("/locations", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location(
    payload: LocationCreate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = locations_crud.create_location(db, identity, payload)
    write_log(
        db, user_id=identity.user_id, action="LOCATION_CREATE", resource="locations",
        ip=client_ip(request), meta={"id": row.id},
    )
    return row


@router.put("/locations/{location_id}", response_model=LocationOut)
def update_location(
    location_id: int,
    payload: LocationUpdate,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    row = locations_crud.update_location(db, identity, location_id, payload)
    write_log(
        db, user_id=identity.user_id, action="LOCATION_UPDATE", resource="locations",
        ip=client_ip(request), meta={"id": location_id},
    )
    return row


@router.delete("/locations/{location_id}", response_model=MessageResponse)
def delete_location(
    location_id: int,
    request: Request,
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    locations_crud.delete_location(db, identity, location_id)
    write_log(
        db, user_id=identity.user_id, action="LOCATION_DELETE", resource="locations",
        ip=client_ip(request), meta={"id": location_id},
    )
    return {"message": "Location deleted"}
