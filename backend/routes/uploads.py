# backend/routes/uploads.py
import os

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

from crud import upload_files_crud
from database import get_db
from schemas.common import MessageResponse
from schemas.upload import UploadOut
from utils.access import Identity
from utils.audit import client_ip, write_log
from utils.storage import LocalObjectStore, get_storage
from utils.tokenJWT import get_current_identity

router = APIRouter(tags=["Uploads"])


def _size_of(file: UploadFile) -> int:
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


# Stores the object and returns the "file:{id}" reference used in item images
@router.post("/upload", response_model=UploadOut, status_code=status.HTTP_201_CREATED)
def upload_file(
    request: Request,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    upload = upload_files_crud.create_upload(
        db,
        identity,
        storage,
        filename=file.filename,
        content_type=file.content_type,
        size=_size_of(file),
        fileobj=file.file,
    )
    write_log(
        db, user_id=identity.user_id, action="FILE_UPLOAD", resource="uploads",
        ip=client_ip(request), meta={"file_id": upload.id, "size": upload.size},
    )
    return UploadOut(
        id=upload.id,
        ref=upload_files_crud.file_ref(upload.id),
        url=storage.url_for(upload.key),
        filename=upload.filename,
        content_type=upload.content_type,
        size=upload.size,
        created_at=upload.created_at,
    )


@router.delete("/upload/{file_id}", response_model=MessageResponse)
def delete_upload(
    file_id: int,
    request: Request,
    db: Session = Depends(get_db),
    storage: LocalObjectStore = Depends(get_storage),
    identity: Identity = Depends(get_current_identity),
):
    upload_files_crud.delete_upload(db, identity, storage, file_id)
    write_log(
        db, user_id=identity.user_id, action="FILE_DELETE", resource="uploads",
        ip=client_ip(request), meta={"file_id": file_id},
    )
    return {"message": "File deleted"}
