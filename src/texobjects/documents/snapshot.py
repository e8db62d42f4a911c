"""Immutable document snapshots consumed by matchers and resolvers."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Sequence

from ..core.spans import Span
from ..errors import InvalidRequestError


@dataclass(slots=True, frozen=True)
class DocumentSnapshot:
    """Read-only view of the document text for a single resolution call.

    ``code_text`` mirrors ``text`` with LaTeX comments blanked out so scans can
    ignore delimiters inside ``%`` comments while keeping every offset intact.
    """

    text: str
    strip_comments: bool = True
    code_text: str = field(init=False, repr=False, compare=False)
    line_start_offsets: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        text = self.text or ""
        object.__setattr__(self, "text", text)
        code = _blank_comments(text) if self.strip_comments else text
        object.__setattr__(self, "code_text", code)
        object.__setattr__(self, "line_start_offsets", _line_offsets(text))

    @property
    def length(self) -> int:
        return len(self.text)

    def char_at(self, index: int) -> str:
        """Return the (comment-stripped) character at ``index`` or ``""`` past the ends."""

        if 0 <= index < len(self.code_text):
            return self.code_text[index]
        return ""

    def is_escaped(self, index: int) -> bool:
        """Return ``True`` when an odd number of backslashes precede ``index``."""

        return _is_escaped(self.code_text, index)

    def slice(self, span: Span) -> str:
        return span.slice(self.text)

    def offset_for(self, line: int, column: int) -> int:
        """Translate a 0-based ``line``/``column`` pair into an absolute offset."""

        if line < 0 or column < 0 or line >= len(self.line_start_offsets):
            raise InvalidRequestError(
                message=f"Line {line}, column {column} is outside the document",
                details={"line": line, "column": column},
            )
        start = self.line_start_offsets[line]
        if line + 1 < len(self.line_start_offsets):
            limit = self.line_start_offsets[line + 1] - 1
        else:
            limit = self.length
        return min(start + column, max(start, limit))

    def position_for(self, offset: int) -> tuple[int, int]:
        """Return the 0-based ``(line, column)`` of ``offset``."""

        offset = max(0, min(int(offset), self.length))
        line = bisect.bisect_right(self.line_start_offsets, offset) - 1
        return line, offset - self.line_start_offsets[line]

    def validate_offset(self, offset: int) -> int:
        """Raise :class:`InvalidRequestError` unless ``offset`` is a position in the document."""

        if not 0 <= offset <= self.length:
            raise InvalidRequestError(
                message=f"Offset {offset} is outside the document (length {self.length})",
                details={"offset": offset, "length": self.length},
            )
        return offset

    def validate_span(self, span: Span) -> Span:
        """Raise :class:`InvalidRequestError` unless ``span`` lies inside the document."""

        if span.end > self.length:
            raise InvalidRequestError(
                message=f"Span {span.start}:{span.end} exceeds document length {self.length}",
                details={"start": span.start, "end": span.end, "length": self.length},
            )
        return span


def _is_escaped(text: str, index: int) -> bool:
    backslashes = 0
    probe = index - 1
    while probe >= 0 and text[probe] == "\\":
        backslashes += 1
        probe -= 1
    return backslashes % 2 == 1


def _blank_comments(text: str) -> str:
    if "%" not in text:
        return text
    chars = list(text)
    index = 0
    length = len(chars)
    while index < length:
        if chars[index] == "%" and not _is_escaped(text, index):
            while index < length and chars[index] != "\n":
                chars[index] = " "
                index += 1
            continue
        index += 1
    return "".join(chars)


def _line_offsets(text: str) -> tuple[int, ...]:
    offsets = [0]
    cursor = 0
    for segment in text.splitlines(keepends=True):
        cursor += len(segment)
        if segment.endswith(("\n", "\r")):
            offsets.append(cursor)
    return tuple(_dedupe_non_decreasing(offsets))


def _dedupe_non_decreasing(values: Sequence[int]) -> list[int]:
    normalized: list[int] = []
    for value in values:
        if normalized and value <= normalized[-1]:
            continue
        normalized.append(value)
    return normalized or [0]


__all__ = ["DocumentSnapshot"]
