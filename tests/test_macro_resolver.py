"""Tests for macro call text objects."""

from __future__ import annotations

import pytest

from texobjects.core.requests import SelectionRequest
from texobjects.core.spans import Span
from texobjects.documents.snapshot import DocumentSnapshot
from texobjects.documents.structure import StructureScanner
from texobjects.errors import NotFoundError
from texobjects.resolvers.macros import MacroResolver


def _inner(text: str, cursor: int) -> str:
    return MacroResolver().resolve_inner(DocumentSnapshot(text), SelectionRequest(cursor=cursor)).slice(text)


def _outer(text: str, cursor: int) -> str:
    return MacroResolver().resolve_outer(DocumentSnapshot(text), SelectionRequest(cursor=cursor)).slice(text)


def test_macro_round_trip() -> None:
    text = "\\foo{bar}"

    assert _inner(text, 6) == "bar"
    assert _outer(text, 6) == "\\foo{bar}"


@pytest.mark.parametrize("cursor", range(0, 6))
def test_empty_argument_selects_name(cursor: int) -> None:
    assert _inner("\\foo{}", cursor) == "foo"


def test_bare_macro_selects_name() -> None:
    text = "see \\LaTeX here"

    assert _inner(text, 6) == "LaTeX"
    assert _outer(text, 6) == "\\LaTeX"


def test_optional_argument() -> None:
    assert _inner("\\item[label] text", 7) == "label"


def test_starred_macro() -> None:
    assert _inner("\\section*{Intro}", 12) == "Intro"


def test_nested_calls_resolve_innermost() -> None:
    text = "\\textbf{a \\emph{b} c}"

    assert _inner(text, 16) == "b"
    assert _outer(text, 16) == "\\emph{b}"
    assert _inner(text, 8) == "a \\emph{b} c"


def test_multiple_groups_span_from_first_open_to_last_close() -> None:
    assert _inner("\\frac{1}{2}", 6) == "1}{2"


def test_dispatch_on_include_delimiters() -> None:
    document = DocumentSnapshot("\\foo{bar}")
    resolver = MacroResolver()

    assert resolver.resolve(document, SelectionRequest(cursor=6)) == Span(5, 8)
    assert resolver.resolve(document, SelectionRequest(cursor=6, include_delimiters=True)) == Span(0, 9)


def test_locate_records_boundaries() -> None:
    scanner = StructureScanner(DocumentSnapshot("\\foo{bar}"))
    resolver = MacroResolver()

    start = resolver.locate_macro_start(scanner, 6)
    end = resolver.locate_macro_end(scanner, 6)

    assert start is not None and end is not None
    assert (start.backslash, start.name_end, start.after_open) == (0, 4, 5)
    assert (end.before_close, end.end) == (8, 9)


@pytest.mark.parametrize("text,cursor", [("plain words", 3), ("a \\\\ b", 3), ("\\foo{x} after", 10)])
def test_no_enclosing_macro(text: str, cursor: int) -> None:
    resolver = MacroResolver()
    document = DocumentSnapshot(text)

    with pytest.raises(NotFoundError, match="No enclosing macro"):
        resolver.resolve_inner(document, SelectionRequest(cursor=cursor))
    with pytest.raises(NotFoundError):
        resolver.resolve_outer(document, SelectionRequest(cursor=cursor))


def test_outer_contains_inner() -> None:
    text = "x \\cite[p. 4]{knuth} y"
    document = DocumentSnapshot(text)
    resolver = MacroResolver()

    for cursor in range(2, 20):
        request = SelectionRequest(cursor=cursor)
        inner = resolver.resolve_inner(document, request)
        outer = resolver.resolve_outer(document, request)
        assert outer.start <= inner.start <= inner.end <= outer.end
        assert outer.contains(cursor)
