# backend/schemas/upload.py
from datetime import datetime

from schemas.common import ORMBase


class UploadOut(ORMBase):
    id: int
    ref: str
    url: str
    filename: str
    content_type: str
    size: int
    created_at: datetime
