# backend/crud/upload_files_crud.py
import logging
import re
import uuid
from pathlib import Path
from typing import BinaryIO, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from config import settings
from crud.base import Resource, create_row, get_owned
from models.item import Item
from models.upload_file import UploadFile
from utils.access import Identity
from utils.errors import ValidationFailed
from utils.pagination import SortKey
from utils.storage import LocalObjectStore

logger = logging.getLogger(__name__)

FILE_REF_RE = re.compile(r"^file:(\d+)$")

RESOURCE = Resource(
    model=UploadFile,
    label="File",
    sort=SortKey(UploadFile.created_at, UploadFile.id, descending=True),
)


def file_ref(file_id: int) -> str:
    return f"file:{file_id}"


def parse_file_ref(ref) -> Optional[int]:
    if not isinstance(ref, str):
        return None
    match = FILE_REF_RE.match(ref)
    return int(match.group(1)) if match else None


def create_upload(
    db: Session,
    identity: Identity,
    storage: LocalObjectStore,
    filename: str,
    content_type: str,
    size: int,
    fileobj: BinaryIO,
) -> UploadFile:
    if content_type not in settings.ALLOWED_UPLOAD_TYPES:
        raise ValidationFailed.for_field("file", f"Unsupported content type: {content_type}")
    if size <= 0:
        raise ValidationFailed.for_field("file", "File is empty")
    if size > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailed.for_field("file", "File is too large")

    suffix = Path(filename or "").suffix.lower()[:10]
    key = f"{identity.user_id}/{uuid.uuid4().hex}{suffix}"
    storage.save(key, fileobj)
    return create_row(
        db,
        RESOURCE,
        identity,
        {"key": key, "filename": filename or key, "content_type": content_type, "size": size},
    )


def resolve_image_refs(
    db: Session,
    identity: Identity,
    refs: List[str],
    storage: LocalObjectStore,
    item_id: Optional[int] = None,
) -> List[int]:
    """File ids for ``refs`` after checking each belongs to the caller and exists in storage.

    A file attached to an item other than ``item_id`` is rejected; one file backs at most one item.
    """
    ids = []
    for ref in refs:
        file_id = parse_file_ref(ref)
        if file_id is None:
            raise ValidationFailed.for_field("images", f"Invalid file reference: {ref}")
        ids.append(file_id)
    if not ids:
        return []

    rows = {
        row.id: row
        for row in db.query(UploadFile).filter(UploadFile.id.in_(ids)).all()
    }
    for file_id in ids:
        row = rows.get(file_id)
        if row is None or row.user_id != identity.user_id:
            raise ValidationFailed.for_field("images", f"File not found: {file_ref(file_id)}")
        if row.item_id is not None and row.item_id != item_id:
            raise ValidationFailed.for_field("images", f"File is attached to another item: {file_ref(file_id)}")
        if not storage.exists(row.key):
            raise ValidationFailed.for_field("images", f"File is missing from storage: {file_ref(file_id)}")
    return ids


def sync_item_files(db: Session, item_id: int, file_ids: Iterable[int]) -> None:
    """Attach ``file_ids`` to the item and detach files it no longer references."""
    file_ids = list(file_ids)
    detach = db.query(UploadFile).filter(UploadFile.item_id == item_id)
    if file_ids:
        detach = detach.filter(UploadFile.id.notin_(file_ids))
    detach.update({UploadFile.item_id: None}, synchronize_session=False)
    if file_ids:
        db.query(UploadFile).filter(UploadFile.id.in_(file_ids)).update(
            {UploadFile.item_id: item_id}, synchronize_session=False
        )


def image_urls(db: Session, items, storage: LocalObjectStore) -> Dict[int, List[str]]:
    """Resolved object URLs per item id, in the order of each item's image list."""
    refs_by_item = {item.id: [parse_file_ref(ref) for ref in (item.images or [])] for item in items}
    wanted = {file_id for refs in refs_by_item.values() for file_id in refs if file_id is not None}
    if not wanted:
        return {item_id: [] for item_id in refs_by_item}

    keys = {
        row.id: row.key
        for row in db.query(UploadFile.id, UploadFile.key).filter(UploadFile.id.in_(wanted))
    }
    return {
        item_id: [storage.url_for(keys[file_id]) for file_id in refs if file_id in keys]
        for item_id, refs in refs_by_item.items()
    }


def purge_files(db: Session, storage: LocalObjectStore, files: Iterable[UploadFile]) -> int:
    """Delete records and, best-effort, their stored objects. Does not commit."""
    count = 0
    for upload in files:
        try:
            storage.delete(upload.key)
        except (OSError, ValueError):
            logger.warning("Failed to delete stored object %s for file %s", upload.key, upload.id, exc_info=True)
        db.delete(upload)
        count += 1
    return count


def delete_upload(db: Session, identity: Identity, storage: LocalObjectStore, file_id: int) -> None:
    upload = get_owned(db, RESOURCE, identity, file_id)
    if upload.item_id is not None:
        item = db.query(Item).filter(Item.id == upload.item_id).first()
        if item is not None:
            ref = file_ref(upload.id)
            item.images = [image for image in (item.images or []) if image != ref]
    purge_files(db, storage, [upload])
    db.commit()
