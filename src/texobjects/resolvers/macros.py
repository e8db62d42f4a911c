"""Resolution of ``\\name{...}`` / ``\\name[...]`` macro calls around a cursor."""

from __future__ import annotations

import logging

from ..core.requests import MacroEnd, MacroStart, SelectionRequest
from ..core.spans import Span
from ..documents.snapshot import DocumentSnapshot
from ..documents.structure import MACRO_NAME_CHARS, StructureScanner
from ..errors import NotFoundError

LOGGER = logging.getLogger(__name__)

_OPENERS = frozenset("{[")
_CLOSERS = frozenset("}]")


class MacroResolver:
    """Compute inner/outer spans of the innermost macro call at the cursor."""

    kind = "macro"

    def locate_macro_start(self, scanner: StructureScanner, cursor: int) -> MacroStart | None:
        backslash = scanner.find_macro_start(cursor)
        if backslash is None:
            return None
        document = scanner.document
        position = backslash + 1
        while document.char_at(position) in MACRO_NAME_CHARS:
            position += 1
        name_end = position
        if document.char_at(position) in _OPENERS:
            position += 1
        return MacroStart(backslash=backslash, name_end=name_end, after_open=position)

    def locate_macro_end(self, scanner: StructureScanner, cursor: int) -> MacroEnd | None:
        end = scanner.find_macro_end(cursor)
        if end is None:
            return None
        before_close = end
        if end > 0 and scanner.document.char_at(end - 1) in _CLOSERS:
            before_close = end - 1
        return MacroEnd(before_close=before_close, end=end)

    def _locate(self, document: DocumentSnapshot, request: SelectionRequest) -> tuple[MacroStart, MacroEnd]:
        scanner = StructureScanner(document)
        start = self.locate_macro_start(scanner, request.cursor)
        end = self.locate_macro_end(scanner, request.cursor)
        if start is None or end is None:
            raise NotFoundError(kind=self.kind, message="No enclosing macro")
        return start, end

    def resolve_outer(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        start, end = self._locate(document, request)
        return Span(start.backslash, end.end)

    def resolve_inner(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        start, end = self._locate(document, request)
        if start.after_open >= end.before_close:
            # Nothing between the delimiters: select the macro name instead.
            LOGGER.debug("Macro at %d has no argument content; selecting its name", start.backslash)
            return Span(start.backslash + 1, start.name_end)
        return Span(start.after_open, end.before_close)

    def resolve(self, document: DocumentSnapshot, request: SelectionRequest) -> Span:
        if request.include_delimiters:
            return self.resolve_outer(document, request)
        return self.resolve_inner(document, request)


__all__ = ["MacroResolver"]
