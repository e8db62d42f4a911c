"""Resolution of ``\\begin{name}`` ... ``\\end{name}`` blocks around a cursor."""

from __future__ import annotations

import logging

from ..core.requests import EnvironmentBounds, SelectionRequest
from ..core.spans import Span
from ..documents.snapshot import DocumentSnapshot
from ..documents.structure import StructureScanner
from ..errors import MalformedDocumentError, NotFoundError

LOGGER = logging.getLogger(__name__)


class EnvironmentResolver:
    """Compute inner/outer spans of the ``count``-th environment around the cursor."""

    kind = "environment"

    def locate_env_start(self, scanner: StructureScanner, cursor: int, count: int = 1) -> tuple[int, int] | None:
        begin_start = scanner.find_matching_env_begin(cursor, count)
        if begin_start is None:
            return None
        open_brace = scanner.scan_char_forward(begin_start, "{")
        close_brace = scanner.scan_balanced_forward(open_brace) if open_brace is not None else None
        if close_brace is None:
            raise MalformedDocumentError(
                kind=self.kind,
                message=f"Unterminated \\begin name group at offset {begin_start}",
            )
        return begin_start, close_brace + 1

    def locate_env_end(self, scanner: StructureScanner, cursor: int, count: int = 1) -> tuple[int, int] | None:
        end_brace = scanner.find_matching_env_end(cursor, count)
        if end_brace is None:
            return None
        open_brace = scanner.scan_balanced_backward(end_brace)
        backslash = scanner.scan_backslash_backward(open_brace) if open_brace is not None else None
        if backslash is None:
            raise MalformedDocumentError(
                kind=self.kind,
                message=f"Unbalanced \\end name group at offset {end_brace}",
            )
        return backslash, end_brace + 1

    def locate(self, document: DocumentSnapshot, request: SelectionRequest) -> EnvironmentBounds:
        scanner = StructureScanner(document)
        start = self.locate_env_start(scanner, request.cursor, request.count)
        end = self.locate_env_end(scanner, request.cursor, request.count)
        if start is None or end is None:
            raise NotFoundError(kind=self.kind, message="No enclosing environment")
        bounds = EnvironmentBounds(
            begin_start=start[0],
            begin_end=start[1],
            end_start=end[0],
            end_end=end[1],
        )
        LOGGER.debug("Environment bounds for cursor %d: %s", request.cursor, bounds)
        return bounds

    def resolve_outer(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        return self.locate(document, request).outer

    def resolve_inner(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        return self.locate(document, request).inner

    def resolve(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        if request.include_delimiters:
            return self.resolve_outer(document, request)
        return self.resolve_inner(document, request)


__all__ = ["EnvironmentResolver"]
