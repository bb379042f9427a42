# backend/schemas/content.py
from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import Field, model_validator

from schemas.common import ORMBase

ContentType = Literal["file", "image", "video"]


class FileData(ORMBase):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    mime_type: str
    size: int = Field(..., ge=0)
    file_path: str


class ImageData(FileData):
    preview_image_url: Optional[str] = None


class VideoData(FileData):
    # Seconds
    video_length: float = Field(..., ge=0)
    preview_video_url: Optional[str] = None


CONTENT_DATA_MODELS = {
    "file": FileData,
    "image": ImageData,
    "video": VideoData,
}


def normalize_content_data(content_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate ``data`` against the shape of ``content_type`` and return it camelCased.

    Raises pydantic.ValidationError on mismatch.
    """
    model = CONTENT_DATA_MODELS[content_type]
    return model.model_validate(data).model_dump(by_alias=True, exclude_none=True)


class ContentCreate(ORMBase):
    type: ContentType
    data: Dict[str, Any]

    @model_validator(mode="after")
    def _check_data(self):
        self.data = normalize_content_data(self.type, self.data)
        return self


# Type and data are re-validated together in the crud layer
class ContentUpdate(ORMBase):
    type: Optional[ContentType] = None
    data: Optional[Dict[str, Any]] = None


class ContentOut(ORMBase):
    id: int
    item_id: int
    type: str
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
