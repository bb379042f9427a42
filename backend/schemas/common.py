# backend/schemas/common.py
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from utils.pagination import Page

T = TypeVar("T")


# ORM-compatible base; camelCase on the wire, snake_case in Python
class ORMBase(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PaginationInfo(ORMBase):
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    has_next_page: bool = False
    has_prev_page: bool = False


class Paginated(ORMBase, Generic[T]):
    data: List[T]
    pagination: PaginationInfo

    @classmethod
    def from_page(cls, page: Page, items: List[Any]) -> "Paginated":
        """Wrap already-serialized ``items`` with the metadata of ``page``."""
        return cls(
            data=items,
            pagination=PaginationInfo(
                next_cursor=page.next_cursor,
                prev_cursor=page.prev_cursor,
                has_next_page=page.has_next_page,
                has_prev_page=page.has_prev_page,
            ),
        )


class MessageResponse(BaseModel):
    message: str
