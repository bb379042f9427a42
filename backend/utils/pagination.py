# backend/utils/pagination.py
"""Keyset (cursor) pagination over a composite (sort column, id) key.

Every collection sorts by one primary column and breaks ties on ``id`` in the
same direction, which gives a strict total order. A cursor stores the
(sort value, id) pair of a page boundary, so following it later returns the
same rows even if other rows were inserted or deleted elsewhere in the order.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar

from fastapi import Query
from sqlalchemy import and_, or_

from config import settings
from utils.cursor import SortValue, decode_cursor, encode_cursor

T = TypeVar("T")

DIRECTION_NEXT = "next"
DIRECTION_PREV = "prev"
DIRECTIONS = (DIRECTION_NEXT, DIRECTION_PREV)

DEFAULT_PAGE_SIZE = settings.DEFAULT_PAGE_SIZE
MAX_PAGE_SIZE = settings.MAX_PAGE_SIZE


def encode_datetime(value: datetime) -> str:
    return value.isoformat()


def decode_datetime(value: SortValue) -> datetime:
    if not isinstance(value, str):
        raise ValueError("timestamp cursor must be a string")
    parsed = datetime.fromisoformat(value)
    # Stored timestamps are naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def decode_text(value: SortValue) -> str:
    if not isinstance(value, str):
        raise ValueError("text cursor must be a string")
    return value


def _passthrough(value):
    return value


@dataclass
class PageParams:
    limit: int = DEFAULT_PAGE_SIZE
    cursor: Optional[str] = None
    direction: str = DIRECTION_NEXT

    @classmethod
    def from_request(
        cls,
        limit: Optional[int] = None,
        cursor: Optional[str] = None,
        direction: Optional[str] = None,
    ) -> Optional["PageParams"]:
        """Pagination is opt-in: no limit and no cursor means a plain list."""
        if limit is None and cursor is None:
            return None
        return cls(
            limit=limit if limit is not None else DEFAULT_PAGE_SIZE,
            cursor=cursor,
            direction=direction if direction in DIRECTIONS else DIRECTION_NEXT,
        )


@dataclass(frozen=True)
class SortKey:
    column: Any
    tiebreak: Any
    descending: bool = False
    encode: Callable[[Any], SortValue] = _passthrough
    decode: Callable[[SortValue], Any] = _passthrough

    def order_by(self, reverse: bool = False) -> list:
        if self.descending != reverse:
            return [self.column.desc(), self.tiebreak.desc()]
        return [self.column.asc(), self.tiebreak.asc()]

    def after(self, value, row_id: int, reverse: bool = False):
        """Rows strictly after (value, row_id) in this order (or the reversed one)."""
        if self.descending != reverse:
            return or_(self.column < value, and_(self.column == value, self.tiebreak < row_id))
        return or_(self.column > value, and_(self.column == value, self.tiebreak > row_id))

    def cursor_for(self, row) -> str:
        return encode_cursor(
            self.encode(getattr(row, self.column.key)),
            getattr(row, self.tiebreak.key),
        )

    def resolve(self, token: Optional[str]) -> Optional[Tuple[Any, int]]:
        """Decoded (sort value, id) or None when the token is absent or unusable."""
        if not token:
            return None
        cursor = decode_cursor(token)
        if cursor is None:
            return None
        try:
            value = self.decode(cursor.sort_value)
        except (TypeError, ValueError):
            return None
        return value, cursor.id


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    has_next_page: bool = False
    has_prev_page: bool = False


def paginate(query, sort: SortKey, params: PageParams) -> Page:
    """Run ``query`` bounded by the cursor in ``params`` and build page metadata.

    ``prev`` queries run in reversed order so the nearest preceding rows come
    first, then the page is flipped back to canonical order. Without a usable
    cursor the first page is returned whatever the direction.
    """
    limit = max(1, min(params.limit, MAX_PAGE_SIZE))
    boundary = sort.resolve(params.cursor)
    backward = boundary is not None and params.direction == DIRECTION_PREV

    if boundary is not None:
        value, row_id = boundary
        query = query.filter(sort.after(value, row_id, reverse=backward))

    # One extra row probes whether another page exists in the walk direction
    rows = query.order_by(*sort.order_by(reverse=backward)).limit(limit + 1).all()
    has_more = len(rows) > limit
    rows = rows[:limit]

    if backward:
        rows.reverse()
        has_next_page, has_prev_page = True, has_more
    else:
        has_next_page, has_prev_page = has_more, boundary is not None

    return Page(
        items=rows,
        next_cursor=sort.cursor_for(rows[-1]) if rows and has_next_page else None,
        prev_cursor=sort.cursor_for(rows[0]) if rows and has_prev_page else None,
        has_next_page=has_next_page,
        has_prev_page=has_prev_page,
    )


def page_params(
    limit: Optional[int] = Query(None, ge=1, le=MAX_PAGE_SIZE),
    cursor: Optional[str] = Query(None),
    direction: Optional[str] = Query(None),
) -> Optional[PageParams]:
    """Query-string dependency; None keeps the endpoint on the plain-array response."""
    return PageParams.from_request(limit=limit, cursor=cursor, direction=direction)
