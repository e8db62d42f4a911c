"""Tests for the single-pattern delimiter matchers."""

from __future__ import annotations

import pytest

from texobjects.core.patterns import Paired, Symmetric
from texobjects.core.requests import SelectionRequest
from texobjects.core.spans import Span
from texobjects.documents.delimiters import (
    PairedStrategy,
    SymmetricStrategy,
    match_paired,
    match_symmetric,
    strategy_for,
)
from texobjects.documents.snapshot import DocumentSnapshot


def _doc(text: str) -> DocumentSnapshot:
    return DocumentSnapshot(text)


class TestMatchSymmetric:
    def test_inner_and_outer(self) -> None:
        document = _doc('say "abc" now')

        assert match_symmetric(document, '"', 6) == Span(5, 8)
        assert match_symmetric(document, '"', 6, include_delimiters=True) == Span(4, 9)

    def test_pairs_left_to_right(self) -> None:
        document = _doc("$a$ and $b$")

        assert match_symmetric(document, "$", 9) == Span(9, 10)
        assert match_symmetric(document, "$", 5) is None

    def test_skips_escaped_delimiters(self) -> None:
        document = _doc("\\$5 and $a$")

        assert match_symmetric(document, "$", 9) == Span(9, 10)

    def test_ignores_delimiters_in_comments(self) -> None:
        document = _doc("% costs $3\n$x$")

        assert match_symmetric(document, "$", 12) == Span(12, 13)

    def test_cursor_on_closing_delimiter_matches(self) -> None:
        document = _doc('"abc"')

        assert match_symmetric(document, '"', 4, include_delimiters=True) == Span(0, 5)

    def test_cursor_after_closing_delimiter_does_not_match(self) -> None:
        document = _doc('"abc" x')

        assert match_symmetric(document, '"', 5) is None

    def test_count_above_one_never_matches(self) -> None:
        document = _doc('"abc"')

        assert match_symmetric(document, '"', 2, count=2) is None

    def test_bounds_must_fit_inside_one_pair(self) -> None:
        document = _doc('"ab" "cd"')

        assert match_symmetric(document, '"', 1, bounds=Span(1, 8)) is None
        assert match_symmetric(document, '"', 6, bounds=Span(6, 8)) == Span(6, 8)


class TestMatchPaired:
    def test_display_math(self) -> None:
        document = _doc("see \\[ x^2 \\] here")

        assert match_paired(document, "\\[", "\\]", 7) == Span(6, 11)
        assert match_paired(document, "\\[", "\\]", 7, include_delimiters=True) == Span(4, 13)

    def test_line_break_with_spacing_is_not_display_math(self) -> None:
        document = _doc("a\\\\[2pt] b")

        assert match_paired(document, "\\[", "\\]", 5) is None

    def test_nested_pairs_and_count(self) -> None:
        document = _doc("\\( a \\( b \\) c \\)")

        assert match_paired(document, "\\(", "\\)", 8) == Span(7, 10)
        assert match_paired(document, "\\(", "\\)", 8, count=2) == Span(2, 15)
        assert match_paired(document, "\\(", "\\)", 8, count=3) is None

    def test_tex_quotes(self) -> None:
        document = _doc("``quoted''")

        assert match_paired(document, "``", "''", 4) == Span(2, 8)

    def test_unclosed_open_is_ignored(self) -> None:
        document = _doc("\\( a \\( b \\)")

        assert match_paired(document, "\\(", "\\)", 3) is None
        assert match_paired(document, "\\(", "\\)", 8) == Span(7, 10)

    def test_regex_tokens(self) -> None:
        document = _doc("<<a>>")

        assert match_paired(document, "<+", ">+", 2, regex=True) == Span(2, 3)


class TestStrategies:
    def test_strategy_dispatch(self) -> None:
        assert isinstance(strategy_for(Symmetric("$")), SymmetricStrategy)
        assert isinstance(strategy_for(Paired("\\[", "\\]")), PairedStrategy)

    def test_strategy_rejects_unknown_patterns(self) -> None:
        with pytest.raises(TypeError):
            strategy_for("$")  # type: ignore[arg-type]

    def test_strategy_uses_request_fields(self) -> None:
        document = _doc("$x+y$")
        strategy = strategy_for(Symmetric("$"))

        assert strategy.match(document, SelectionRequest(cursor=2)) == Span(1, 4)
        assert strategy.match(document, SelectionRequest(cursor=2, include_delimiters=True)) == Span(0, 5)


def test_paired_rejects_identical_tokens() -> None:
    with pytest.raises(ValueError):
        Paired("$", "$")
