"""Tests for the structural boundary primitives."""

from __future__ import annotations

from texobjects.documents.snapshot import DocumentSnapshot
from texobjects.documents.structure import MacroCall, StructureScanner


def _scanner(text: str) -> StructureScanner:
    return StructureScanner(DocumentSnapshot(text))


class TestMacroCalls:
    def test_collects_nested_calls(self) -> None:
        scanner = _scanner("\\textbf{a \\emph{b} c}")

        assert scanner.macro_calls() == [
            MacroCall(start=0, name_end=7, end=21),
            MacroCall(start=10, name_end=15, end=18),
        ]

    def test_innermost_call_wins(self) -> None:
        scanner = _scanner("\\textbf{a \\emph{b} c}")

        assert scanner.find_macro_start(16) == 10
        assert scanner.find_macro_end(16) == 18
        assert scanner.find_macro_start(19) == 0
        assert scanner.find_macro_end(19) == 21

    def test_multiple_argument_groups(self) -> None:
        scanner = _scanner("\\frac[x]{1}{2} tail")

        assert scanner.find_macro_end(0) == 14
        assert scanner.find_macro_start(15) is None

    def test_control_symbols_are_not_macros(self) -> None:
        scanner = _scanner("a \\\\ b \\{ c")

        assert scanner.macro_calls() == []

    def test_unbalanced_argument_stops_at_name(self) -> None:
        scanner = _scanner("\\foo{bar")

        assert scanner.macro_calls() == [MacroCall(start=0, name_end=4, end=4)]

    def test_starred_names(self) -> None:
        scanner = _scanner("\\section*{Intro}")

        assert scanner.macro_calls() == [MacroCall(start=0, name_end=9, end=16)]


class TestEnvironments:
    def test_pairs_nested_same_name_blocks(self) -> None:
        text = "\\begin{a}X\\begin{a}Y\\end{a}Z\\end{a}"
        scanner = _scanner(text)

        assert scanner.find_matching_env_begin(19) == 10
        assert scanner.find_matching_env_end(19) == 26
        assert scanner.find_matching_env_begin(27) == 0
        assert scanner.find_matching_env_end(27) == 34
        assert scanner.find_matching_env_begin(19, count=2) == 0
        assert scanner.find_matching_env_begin(19, count=3) is None

    def test_unclosed_begin_is_dropped(self) -> None:
        scanner = _scanner("\\begin{a}\\begin{b}x\\end{a}")

        block = scanner.enclosing_environment(18)
        assert block is not None
        assert block.name == "a"
        assert scanner.find_matching_env_begin(18) == 0

    def test_stray_end_is_ignored(self) -> None:
        scanner = _scanner("x\\end{a}")

        assert scanner.environments() == []
        assert scanner.find_matching_env_end(0) is None

    def test_commented_tokens_are_ignored(self) -> None:
        scanner = _scanner("% \\begin{a}\n\\begin{b}x\\end{b}")

        assert [block.name for block in scanner.environments()] == ["b"]


class TestBalancedScans:
    def test_forward_brace_group(self) -> None:
        scanner = _scanner("{a{b}\\}c}d")

        assert scanner.scan_balanced_forward(0) == 8

    def test_forward_bracket_ignores_brackets_in_braces(self) -> None:
        scanner = _scanner("[a{]}b]")

        assert scanner.scan_balanced_forward(0) == 6

    def test_forward_requires_an_opener(self) -> None:
        scanner = _scanner("abc")

        assert scanner.scan_balanced_forward(1) is None

    def test_forward_unbalanced_returns_none(self) -> None:
        scanner = _scanner("{a{b}")

        assert scanner.scan_balanced_forward(0) is None

    def test_backward_brace_group(self) -> None:
        scanner = _scanner("x{a{b}\\}c}")

        assert scanner.scan_balanced_backward(9) == 1

    def test_backward_requires_closing_brace(self) -> None:
        scanner = _scanner("{a}")

        assert scanner.scan_balanced_backward(1) is None

    def test_char_and_backslash_scans(self) -> None:
        scanner = _scanner("\\end{a}")

        assert scanner.scan_char_forward(0, "{") == 4
        assert scanner.scan_backslash_backward(4) == 0
        assert scanner.scan_char_forward(5, "{") is None
