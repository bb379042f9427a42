# backend/schemas/qrcode.py
from pydantic import Field

from schemas.common import ORMBase


class QrScanRequest(ORMBase):
    qrcontent: str = Field(..., min_length=1)


class QrScanResult(ORMBase):
    type: str
    url: str
