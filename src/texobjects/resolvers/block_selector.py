"""Narrowest-match selection across several candidate delimiter patterns."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

from ..core.patterns import CandidatePattern, describe_pattern
from ..core.requests import SelectionRequest
from ..core.spans import Span
from ..documents.delimiters import MatchStrategy, strategy_for
from ..documents.snapshot import DocumentSnapshot
from ..errors import NotFoundError

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class BlockSelector:
    """Pick the narrowest span produced by any of ``candidates``.

    Candidates are tried in order. A later candidate only replaces the current
    best when it is strictly narrower, so ties go to the earlier candidate.
    """

    kind: str
    candidates: Sequence[CandidatePattern]
    strategy_factory: Callable[[CandidatePattern], MatchStrategy] = strategy_for
    _strategies: tuple[MatchStrategy, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.candidates = tuple(self.candidates)
        if not self.candidates:
            raise ValueError("BlockSelector requires at least one candidate pattern")
        self._strategies = tuple(self.strategy_factory(pattern) for pattern in self.candidates)

    def resolve(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        best: Span | None = None
        for pattern, strategy in zip(self.candidates, self._strategies):
            span = strategy.match(document, request)
            if span is None:
                LOGGER.debug("%s: %s does not enclose %d", self.kind, describe_pattern(pattern), request.cursor)
                continue
            if not request.accepts(span):
                LOGGER.debug("%s: %s match %s excludes the requested bounds", self.kind, describe_pattern(pattern), span.to_tuple())
                continue
            if best is None or span.width < best.width:
                best = span
        if best is None:
            raise NotFoundError(kind=self.kind, message=f"No enclosing {self.kind} at offset {request.cursor}")
        return best


__all__ = ["BlockSelector"]
