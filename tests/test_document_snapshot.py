"""Tests for DocumentSnapshot helpers."""

from __future__ import annotations

import pytest

from texobjects.core.spans import Span
from texobjects.documents.snapshot import DocumentSnapshot
from texobjects.errors import InvalidRequestError


def test_code_text_blanks_comments_but_keeps_offsets() -> None:
    text = "a % \\begin{x}\nb"
    document = DocumentSnapshot(text)

    assert len(document.code_text) == len(text)
    assert "begin" not in document.code_text
    assert document.code_text.endswith("\nb")


def test_escaped_percent_is_not_a_comment() -> None:
    document = DocumentSnapshot("50\\% off $x$")

    assert document.code_text == document.text


def test_comments_are_kept_when_stripping_disabled() -> None:
    document = DocumentSnapshot("a % b", strip_comments=False)

    assert document.code_text == "a % b"


def test_is_escaped_counts_backslashes() -> None:
    document = DocumentSnapshot("\\$ \\\\$")

    assert document.is_escaped(1)
    assert not document.is_escaped(5)


def test_char_at_returns_empty_past_the_ends() -> None:
    document = DocumentSnapshot("ab")

    assert document.char_at(1) == "b"
    assert document.char_at(2) == ""
    assert document.char_at(-1) == ""


def test_offset_and_position_round_trip() -> None:
    document = DocumentSnapshot("first\nsecond\nthird")

    assert document.offset_for(1, 2) == 8
    assert document.position_for(8) == (1, 2)
    assert document.offset_for(0, 99) == 5
    assert document.position_for(len(document.text)) == (2, 5)


def test_offset_for_rejects_unknown_lines() -> None:
    document = DocumentSnapshot("one line")

    with pytest.raises(InvalidRequestError):
        document.offset_for(3, 0)


def test_validate_span_rejects_spans_past_the_end() -> None:
    document = DocumentSnapshot("abc")

    assert document.validate_span(Span(0, 3)) == Span(0, 3)
    with pytest.raises(InvalidRequestError):
        document.validate_span(Span(1, 4))


def test_validate_offset_accepts_end_of_document() -> None:
    document = DocumentSnapshot("abc")

    assert document.validate_offset(3) == 3
    with pytest.raises(InvalidRequestError, match="outside the document"):
        document.validate_offset(4)
