# backend/schemas/item.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, computed_field

from config import settings
from schemas.author import AuthorSummary
from schemas.category import CategorySummary
from schemas.common import ORMBase
from schemas.content import ContentOut
from schemas.location import LocationSummary
from schemas.position import PositionInput, PositionOut

Visibility = Literal["public", "private"]


def item_preview_url(item_id: int) -> str:
    return f"{settings.PUBLIC_URL.rstrip('/')}/preview/item/{item_id}"


# Shared base attributes for item entities
class ItemBase(ORMBase):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    original_qr_code: Optional[str] = None
    category_id: Optional[int] = None
    location_id: Optional[int] = None
    author_id: Optional[int] = None
    parent_id: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency: str = Field(default="USD", min_length=1, max_length=8)
    visibility: Visibility = "private"
    # "file:{id}" references to uploads
    images: List[str] = Field(default_factory=list)


class ItemCreate(ItemBase):
    positions: Optional[List[PositionInput]] = None


# PUT payload; only the fields that are sent get written
class ItemUpdate(ORMBase):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    original_qr_code: Optional[str] = None
    category_id: Optional[int] = None
    location_id: Optional[int] = None
    author_id: Optional[int] = None
    parent_id: Optional[int] = None
    price: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, min_length=1, max_length=8)
    visibility: Optional[Visibility] = None
    images: Optional[List[str]] = None
    # When present, replaces every position of the item
    positions: Optional[List[PositionInput]] = None


class ParentUpdate(ORMBase):
    parent_id: Optional[int] = None


class ItemOut(ItemBase):
    id: int
    user_id: str
    created_at: datetime
    updated_at: datetime

    category: Optional[CategorySummary] = None
    location: Optional[LocationSummary] = None
    author: Optional[AuthorSummary] = None
    image_urls: List[str] = Field(default_factory=list)

    @computed_field(alias="previewUrl")
    @property
    def preview_url(self) -> str:
        return item_preview_url(self.id)


class ItemDetail(ItemOut):
    children: List[ItemOut] = Field(default_factory=list)
    contents: List[ContentOut] = Field(default_factory=list)
    positions: List[PositionOut] = Field(default_factory=list)
    quantity: int = 0


# Shareable read-only view behind previewUrl / scanned QR codes
class ItemPreview(ItemOut):
    contents: List[ContentOut] = Field(default_factory=list)


class ItemPreviewResponse(ORMBase):
    data: ItemPreview
