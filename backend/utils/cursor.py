# backend/utils/cursor.py
"""Opaque pagination cursors.

A cursor is URL-safe base64 (padding stripped) of ``{"sortValue": ..., "id": ...}``.
Decoding never raises: anything malformed, truncated or tampered with comes
back as ``None`` and the caller falls back to the first page.
"""
import base64
import binascii
import json
from typing import NamedTuple, Optional, Union

SortValue = Union[str, int, float]

# Upper bound on accepted token length; real cursors are well under 200 chars
MAX_CURSOR_LENGTH = 512


class CursorValue(NamedTuple):
    sort_value: SortValue
    id: int


def encode_cursor(sort_value: SortValue, row_id: int) -> str:
    payload = json.dumps({"sortValue": sort_value, "id": row_id}, separators=(",", ":"))
    token = base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")
    return token.rstrip("=")


def decode_cursor(token) -> Optional[CursorValue]:
    if not isinstance(token, str) or not token or len(token) > MAX_CURSOR_LENGTH:
        return None

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        parsed = json.loads(raw.decode("utf-8"))
    except (ValueError, binascii.Error, UnicodeError):
        return None

    if not isinstance(parsed, dict) or "sortValue" not in parsed or "id" not in parsed:
        return None

    row_id = parsed["id"]
    sort_value = parsed["sortValue"]
    # bool is a subclass of int, reject it explicitly
    if isinstance(row_id, bool) or not isinstance(row_id, int):
        return None
    if isinstance(sort_value, bool) or not isinstance(sort_value, (str, int, float)):
        return None

    return CursorValue(sort_value=sort_value, id=row_id)
