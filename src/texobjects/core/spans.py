"""Structured helpers for representing selected document spans."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator


@dataclass(slots=True, frozen=True)
class Span(Sequence[int]):
    """Half-open ``[start, end)`` region of a document using absolute offsets."""

    start: int
    end: int

    def __post_init__(self) -> None:
        start = self._coerce_index(self.start, "start")
        end = self._coerce_index(self.end, "end")
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Span {label} must be an integer") from exc
        if number < 0:
            raise ValueError(f"Span {label} must not be negative")
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.start
        if index == 1:
            return self.end
        raise IndexError("Span index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.start
        yield self.end

    @property
    def width(self) -> int:
        """Return the number of characters covered by the span."""

        return self.end - self.start

    @property
    def is_caret(self) -> bool:
        """Return ``True`` when the span collapses to a caret."""

        return self.start == self.end

    def contains(self, other: Span | int) -> bool:
        """Return ``True`` when ``other`` (a span or a bare offset) lies inside."""

        if isinstance(other, Span):
            return self.start <= other.start and other.end <= self.end
        return self.start <= int(other) <= self.end

    def slice(self, text: str) -> str:
        """Return the characters of ``text`` selected by the span."""

        return text[self.start : self.end]

    def to_tuple(self) -> tuple[int, int]:
        """Return the span as a ``(start, end)`` tuple."""

        return (self.start, self.end)

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}

    def clamp(self, *, lower: int = 0, upper: int | None = None) -> Span:
        """Clamp the span to ``[lower, upper]`` bounds."""

        start = max(lower, self.start)
        end = max(lower, self.end)
        if upper is not None:
            start = min(start, upper)
            end = min(end, upper)
        return Span(start=start, end=end)

    @classmethod
    def from_value(cls, value: Any) -> Span:
        """Coerce ``value`` (span, mapping, pair or ``start:end`` string) into a :class:`Span`."""

        if isinstance(value, Span):
            return value
        if value is None:
            raise ValueError("Span value is required")
        if isinstance(value, str):
            head, sep, tail = value.partition(":")
            if not sep:
                raise ValueError("Span strings must use START:END syntax")
            return cls(head.strip(), tail.strip())
        if isinstance(value, Mapping):
            start = value.get("start")
            end = value.get("end")
            if start is None or end is None:
                raise ValueError("Span mappings require start and end keys")
            return cls(start, end)
        if isinstance(value, Sequence) and not isinstance(value, bytes):
            seq = list(value)
            if len(seq) != 2:
                raise ValueError("Span sequences must have exactly two entries")
            return cls(seq[0], seq[1])
        raise TypeError("Unsupported Span input")

    @classmethod
    def caret(cls, offset: int) -> Span:
        """Return a zero-width span at ``offset``."""

        return cls(offset, offset)


__all__ = ["Span"]
