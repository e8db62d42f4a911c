"""Candidate delimiter shapes considered when resolving delimited text objects."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


@dataclass(slots=True, frozen=True)
class Symmetric:
    """A single character that both opens and closes the construct (``"``, ``$``)."""

    delimiter: str

    def __post_init__(self) -> None:
        if len(self.delimiter) != 1:
            raise ValueError("Symmetric delimiters must be exactly one character")


@dataclass(slots=True, frozen=True)
class Paired:
    """Distinct opening and closing tokens such as ``\\[`` / ``\\]``.

    Tokens are literal text unless ``regex`` is set, in which case they are
    compiled as regular expressions.
    """

    open: str
    close: str
    regex: bool = False

    def __post_init__(self) -> None:
        if not self.open or not self.close:
            raise ValueError("Paired delimiters require non-empty open and close tokens")
        if self.open == self.close:
            raise ValueError("Identical open/close tokens must use Symmetric")

    def open_pattern(self) -> str:
        return self.open if self.regex else re.escape(self.open)

    def close_pattern(self) -> str:
        return self.close if self.regex else re.escape(self.close)


CandidatePattern = Union[Symmetric, Paired]

QUOTE_CANDIDATES: tuple[CandidatePattern, ...] = (Paired("``", "''"), Symmetric('"'))
DOLLAR_MATH_CANDIDATES: tuple[CandidatePattern, ...] = (Symmetric("$"),)
BRACKET_MATH_CANDIDATES: tuple[CandidatePattern, ...] = (Paired("\\[", "\\]"), Paired("\\(", "\\)"))


def describe_pattern(pattern: CandidatePattern) -> str:
    """Return a short human-readable label used in log messages."""

    if isinstance(pattern, Symmetric):
        return f"{pattern.delimiter}...{pattern.delimiter}"
    return f"{pattern.open}...{pattern.close}"


__all__ = [
    "BRACKET_MATH_CANDIDATES",
    "CandidatePattern",
    "DOLLAR_MATH_CANDIDATES",
    "Paired",
    "QUOTE_CANDIDATES",
    "Symmetric",
    "describe_pattern",
]
