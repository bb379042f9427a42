"""Tests for the opaque cursor codec."""

import base64
import json

import pytest

from utils.cursor import MAX_CURSOR_LENGTH, CursorValue, decode_cursor, encode_cursor


def _raw(payload) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def test_encode_then_decode_keeps_sort_value_and_id():
    token = encode_cursor("2026-01-01T12:00:00", 42)

    assert decode_cursor(token) == CursorValue(sort_value="2026-01-01T12:00:00", id=42)


def test_token_is_url_safe_without_padding():
    token = encode_cursor("név/ü?&=+", 7)

    assert "=" not in token
    assert "+" not in token and "/" not in token
    assert decode_cursor(token).sort_value == "név/ü?&=+"


def test_numeric_sort_values_survive():
    assert decode_cursor(encode_cursor(12.5, 3)) == CursorValue(12.5, 3)
    assert decode_cursor(encode_cursor(0, 1)) == CursorValue(0, 1)


@pytest.mark.parametrize(
    "token",
    [
        None,
        123,
        "",
        "%%%not-base64%%%",
        "a",
        base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode("ascii"),
        base64.urlsafe_b64encode(b"not json").decode("ascii"),
        _raw(["sortValue", 1]),
        _raw({"sortValue": "x"}),
        _raw({"id": 1}),
        _raw({"sortValue": "x", "id": "1"}),
        _raw({"sortValue": "x", "id": True}),
        _raw({"sortValue": "x", "id": 1.5}),
        _raw({"sortValue": {"nested": 1}, "id": 1}),
        _raw({"sortValue": False, "id": 1}),
        _raw({"sortValue": None, "id": 1}),
    ],
)
def test_malformed_tokens_decode_to_none(token):
    assert decode_cursor(token) is None


def test_oversized_token_is_rejected():
    token = encode_cursor("x" * MAX_CURSOR_LENGTH, 1)

    assert len(token) > MAX_CURSOR_LENGTH
    assert decode_cursor(token) is None


def test_truncated_token_does_not_raise():
    token = encode_cursor("2026-01-01T12:00:00", 99)

    for cut in range(1, len(token)):
        # Either a clean None or (rarely) a valid prefix, never an exception
        result = decode_cursor(token[:cut])
        assert result is None or isinstance(result, CursorValue)
