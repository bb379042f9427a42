# backend/crud/account_deletion_crud.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import settings
from crud import deletion_crud
from database import utcnow
from models.account_deletion import STATUS_CANCELLED, STATUS_COMPLETED, STATUS_PENDING, AccountDeletion
from utils.access import Identity
from utils.errors import Conflict, ServiceUnavailable
from utils.scheduler import DeletionScheduler, SchedulerError, scheduled_time
from utils.storage import LocalObjectStore

logger = logging.getLogger(__name__)

DUPLICATE_REQUEST = "Account deletion already requested"
NO_PENDING = "No pending account deletion found"


def get_pending(db: Session, user_id: str) -> Optional[AccountDeletion]:
    return (
        db.query(AccountDeletion)
        .filter(AccountDeletion.user_id == user_id, AccountDeletion.status == STATUS_PENDING)
        .first()
    )


def request_deletion(
    db: Session, identity: Identity, scheduler: DeletionScheduler, callback_url: str
) -> AccountDeletion:
    """none|cancelled|completed -> pending; a second pending request is a Conflict."""
    if get_pending(db, identity.user_id) is not None:
        raise Conflict(DUPLICATE_REQUEST)

    delay_seconds = settings.ACCOUNT_DELETION_DELAY_HOURS * 3600
    try:
        job_ref = scheduler.schedule(callback_url, identity.user_id, delay_seconds)
    except SchedulerError:
        raise ServiceUnavailable("Failed to schedule account deletion")

    now = utcnow()
    deletion = AccountDeletion(
        user_id=identity.user_id,
        user_email=identity.email,
        status=STATUS_PENDING,
        scheduled_at=scheduled_time(now),
        external_job_ref=job_ref,
        created_at=now,
        updated_at=now,
    )
    db.add(deletion)
    try:
        db.commit()
    except IntegrityError:
        # The partial unique index caught a concurrent request
        db.rollback()
        if job_ref:
            _cancel_job(scheduler, job_ref)
        raise Conflict(DUPLICATE_REQUEST)
    db.refresh(deletion)
    return deletion


def _cancel_job(scheduler: DeletionScheduler, job_ref: str) -> None:
    try:
        scheduler.cancel(job_ref)
    except SchedulerError:
        logger.warning("Could not cancel scheduled deletion job %s", job_ref)


def cancel_deletion(db: Session, identity: Identity, scheduler: DeletionScheduler) -> AccountDeletion:
    deletion = get_pending(db, identity.user_id)
    if deletion is None:
        raise Conflict(NO_PENDING)

    # Cancelling locally still wins if the scheduler is unreachable
    if deletion.external_job_ref:
        _cancel_job(scheduler, deletion.external_job_ref)

    deletion.status = STATUS_CANCELLED
    db.commit()
    db.refresh(deletion)
    return deletion


def execute_deletion(db: Session, user_id: str, storage: LocalObjectStore) -> AccountDeletion:
    """pending -> completed, removing all of the user's data first."""
    deletion = get_pending(db, user_id)
    if deletion is None:
        raise Conflict(f"{NO_PENDING} (may have been cancelled)")

    deletion_crud.delete_account(db, user_id, storage)

    deletion.status = STATUS_COMPLETED
    db.commit()
    db.refresh(deletion)
    logger.info("Account deletion %s completed for user %s", deletion.id, user_id)
    return deletion
