"""Request and boundary records exchanged between hosts and resolvers."""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import InvalidRequestError
from .spans import Span


@dataclass(slots=True, frozen=True)
class SelectionRequest:
    """Describes which text object the host wants around ``cursor``.

    ``bounds`` is the host's current selection, when there is one. A match is
    only acceptable when it contains the whole of ``bounds`` rather than just
    the bare cursor.
    """

    cursor: int
    bounds: Span | None = None
    count: int = 1
    include_delimiters: bool = False

    def __post_init__(self) -> None:
        if int(self.cursor) < 0:
            raise InvalidRequestError(
                message=f"Cursor {self.cursor} must not be negative",
                details={"cursor": self.cursor},
            )
        if int(self.count) < 1:
            raise InvalidRequestError(
                message=f"Count {self.count} must be at least 1",
                details={"count": self.count},
            )

    @property
    def target(self) -> Span:
        """Return the region a candidate match has to contain."""

        if self.bounds is not None:
            return self.bounds
        return Span.caret(self.cursor)

    def accepts(self, span: Span) -> bool:
        """Return ``True`` when ``span`` contains the requested bounds or cursor."""

        return span.contains(self.target)

    def with_delimiters(self, include: bool) -> SelectionRequest:
        if include == self.include_delimiters:
            return self
        return replace(self, include_delimiters=include)


@dataclass(slots=True, frozen=True)
class MacroStart:
    """Opening edge of a macro call: ``\\name{`` or ``\\name[``."""

    backslash: int
    name_end: int
    after_open: int


@dataclass(slots=True, frozen=True)
class MacroEnd:
    """Closing edge of a macro call."""

    before_close: int
    end: int


@dataclass(slots=True, frozen=True)
class EnvironmentBounds:
    """Offsets delimiting a ``\\begin{name}`` ... ``\\end{name}`` block.

    ``begin_end`` and ``end_end`` point just past the closing brace of the
    respective name group.
    """

    begin_start: int
    begin_end: int
    end_start: int
    end_end: int

    @property
    def outer(self) -> Span:
        return Span(self.begin_start, self.end_end)

    @property
    def inner(self) -> Span:
        return Span(self.begin_end, self.end_start)


__all__ = ["EnvironmentBounds", "MacroEnd", "MacroStart", "SelectionRequest"]
