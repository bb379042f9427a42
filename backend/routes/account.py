# backend/routes/account.py
import logging

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from config import settings
from crud import account_deletion_crud
from database import get_db
from schemas.account_deletion import AccountDeletionRequested, AccountDeletionStatus, DeletionCallback
from schemas.common import MessageResponse
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.errors import Unauthorized, ValidationFailed
from utils.scheduler import DeletionScheduler, get_scheduler
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import get_current_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["Account"])

SIGNATURE_HEADER = "X-Scheduler-Signature"


def _callback_url() -> str:
    return f"{settings.PUBLIC_URL.rstrip('/')}/api/v1/account/delete/callback"


@router.get("/delete", response_model=AccountDeletionStatus)
def get_deletion_status(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_current_identity),
):
    pending = account_deletion_crud.get_pending(db, identity.user_id)
    return {"pending": pending is not None, "deletion": pending}


@router.post("/delete", response_model=AccountDeletionRequested, status_code=status.HTTP_201_CREATED)
def request_deletion(
    request: Request,
    db: Session = Depends(get_db),
    scheduler: DeletionScheduler = Depends(get_scheduler),
    identity: Identity = Depends(get_current_identity),
):
    deletion = account_deletion_crud.request_deletion(db, identity, scheduler, _callback_url())
    write_log(
        db, user_id=identity.user_id, action="ACCOUNT_DELETION_REQUEST", resource="account",
        ip=client_ip(request), meta={"deletion_id": deletion.id},
    )
    hours = settings.ACCOUNT_DELETION_DELAY_HOURS
    return {
        "message": (
            f"Account deletion scheduled. Your account will be deleted in {hours} hours. "
            "You can cancel this during the grace period."
        ),
        "deletion": deletion,
    }


@router.delete("/delete", response_model=MessageResponse)
def cancel_deletion(
    request: Request,
    db: Session = Depends(get_db),
    scheduler: DeletionScheduler = Depends(get_scheduler),
    identity: Identity = Depends(get_current_identity),
):
    deletion = account_deletion_crud.cancel_deletion(db, identity, scheduler)
    write_log(
        db, user_id=identity.user_id, action="ACCOUNT_DELETION_CANCEL", resource="account",
        ip=client_ip(request), meta={"deletion_id": deletion.id},
    )
    return {"message": "Account deletion cancelled successfully."}


# Called by the scheduler once the grace period is over, never by end users
@router.post("/delete/callback", response_model=MessageResponse)
async def deletion_callback(
    request: Request,
    db: Session = Depends(get_db),
    scheduler: DeletionScheduler = Depends(get_scheduler),
    storage: LocalObjectStore = Depends(get_storage),
):
    body = await request.body()
    signature = request.headers.get(SIGNATURE_HEADER)
    if scheduler.signing_key and not signature:
        raise Unauthorized("Missing signature")
    if not scheduler.verify_callback_signature(body, signature):
        logger.warning("Rejected account deletion callback with a bad signature")
        raise Unauthorized("Invalid signature")

    try:
        payload = DeletionCallback.model_validate_json(body)
    except ValidationError:
        raise ValidationFailed("Missing userId")

    account_deletion_crud.execute_deletion(db, payload.user_id, storage)
    write_log(
        db, user_id=payload.user_id, action="ACCOUNT_DELETION_EXECUTE", resource="account",
        ip=client_ip(request),
    )
    return {"message": "Account deleted successfully"}
