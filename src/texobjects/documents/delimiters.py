"""Single-pattern delimiter matchers.

Each matcher looks for one kind of delimiter pair around a position and
returns the enclosing :class:`Span`, or ``None`` when that delimiter kind does
not enclose the position. Matchers never raise for a missing match.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol

from ..core.patterns import CandidatePattern, Paired, Symmetric
from ..core.requests import SelectionRequest
from ..core.spans import Span
from .snapshot import DocumentSnapshot

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DelimiterPair:
    """Offsets of a matched open/close token pair."""

    open_start: int
    open_end: int
    close_start: int
    close_end: int

    @property
    def outer(self) -> Span:
        return Span(self.open_start, self.close_end)

    @property
    def inner(self) -> Span:
        return Span(self.open_end, self.close_start)

    def span(self, include_delimiters: bool) -> Span:
        return self.outer if include_delimiters else self.inner


def match_symmetric(
    document: DocumentSnapshot,
    delimiter: str,
    cursor: int,
    bounds: Span | None = None,
    count: int = 1,
    include_delimiters: bool = False,
) -> Span | None:
    """Match a one-character delimiter that both opens and closes (``"``, ``$``)."""

    if count > 1:
        return None
    target = bounds if bounds is not None else Span.caret(cursor)
    for pair in _symmetric_pairs(document, delimiter):
        if pair.open_start > target.start:
            break
        if pair.outer.contains(target) and target.start < pair.close_end:
            return pair.span(include_delimiters)
    return None


def match_paired(
    document: DocumentSnapshot,
    open_token: str,
    close_token: str,
    cursor: int,
    bounds: Span | None = None,
    count: int = 1,
    include_delimiters: bool = False,
    *,
    regex: bool = False,
) -> Span | None:
    """Match distinct open/close tokens, honouring nesting and ``count``."""

    pattern = Paired(open_token, close_token, regex=regex)
    target = bounds if bounds is not None else Span.caret(cursor)
    enclosing = [
        pair
        for pair in _paired_pairs(document, pattern)
        if pair.outer.contains(target) and target.start < pair.close_end
    ]
    if len(enclosing) < count:
        return None
    enclosing.sort(key=lambda pair: pair.open_start, reverse=True)
    return enclosing[count - 1].span(include_delimiters)


def _symmetric_pairs(document: DocumentSnapshot, delimiter: str) -> list[DelimiterPair]:
    code = document.code_text
    positions = [
        index
        for index, char in enumerate(code)
        if char == delimiter and not document.is_escaped(index)
    ]
    return [
        DelimiterPair(open_at, open_at + 1, close_at, close_at + 1)
        for open_at, close_at in zip(positions[0::2], positions[1::2])
    ]


def _paired_pairs(document: DocumentSnapshot, pattern: Paired) -> list[DelimiterPair]:
    scanner = _token_regex(pattern.open_pattern(), pattern.close_pattern())
    pairs: list[DelimiterPair] = []
    stack: list[re.Match[str]] = []
    for match in scanner.finditer(document.code_text):
        if match.end() == match.start() or document.is_escaped(match.start()):
            continue
        if match.lastgroup == "open":
            stack.append(match)
        elif stack:
            opener = stack.pop()
            pairs.append(DelimiterPair(opener.start(), opener.end(), match.start(), match.end()))
    if stack:
        LOGGER.debug("Ignoring %d unclosed %r token(s)", len(stack), pattern.open)
    return pairs


@lru_cache(maxsize=32)
def _token_regex(open_pattern: str, close_pattern: str) -> re.Pattern[str]:
    return re.compile(f"(?P<open>{open_pattern})|(?P<close>{close_pattern})")


class MatchStrategy(Protocol):
    """Matches one candidate pattern against a document."""

    def match(self, document: DocumentSnapshot, request: SelectionRequest) -> Span | None:
        ...


@dataclass(slots=True, frozen=True)
class SymmetricStrategy:
    pattern: Symmetric

    def match(self, document: DocumentSnapshot, request: SelectionRequest) -> Span | None:
        return match_symmetric(
            document,
            self.pattern.delimiter,
            request.cursor,
            request.bounds,
            request.count,
            request.include_delimiters,
        )


@dataclass(slots=True, frozen=True)
class PairedStrategy:
    pattern: Paired

    def match(self, document: DocumentSnapshot, request: SelectionRequest) -> Span | None:
        return match_paired(
            document,
            self.pattern.open,
            self.pattern.close,
            request.cursor,
            request.bounds,
            request.count,
            request.include_delimiters,
            regex=self.pattern.regex,
        )


def strategy_for(pattern: CandidatePattern) -> MatchStrategy:
    """Return the matcher implementing ``pattern``'s variant."""

    if isinstance(pattern, Symmetric):
        return SymmetricStrategy(pattern)
    if isinstance(pattern, Paired):
        return PairedStrategy(pattern)
    raise TypeError(f"Unsupported candidate pattern: {pattern!r}")


__all__ = [
    "DelimiterPair",
    "MatchStrategy",
    "PairedStrategy",
    "SymmetricStrategy",
    "match_paired",
    "match_symmetric",
    "strategy_for",
]
