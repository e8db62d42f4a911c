"""PySide6 host wiring text objects into a ``QPlainTextEdit``."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QPlainTextEdit

from ..core.requests import SelectionRequest
from ..core.spans import Span
from ..documents.snapshot import DocumentSnapshot
from ..errors import NotFoundError, UnknownObjectError
from ..registry import Resolver, TextObjectRegistry, build_default_registry, install_text_objects

LOGGER = logging.getLogger(__name__)


@contextmanager
def preserved_text_cursor(editor: QPlainTextEdit) -> Iterator[QTextCursor]:
    """Restore ``editor``'s text cursor when the block exits, even on error."""

    saved = QTextCursor(editor.textCursor())
    try:
        yield saved
    finally:
        editor.setTextCursor(saved)


def to_qt_position(text: str, offset: int) -> int:
    """Convert a Python string offset into a Qt (UTF-16 code unit) position."""

    prefix = text[:offset]
    return offset + sum(1 for char in prefix if ord(char) > 0xFFFF)


def from_qt_position(text: str, position: int) -> int:
    """Convert a Qt (UTF-16 code unit) position into a Python string offset."""

    units = 0
    for index, char in enumerate(text):
        if units >= position:
            return index
        units += 2 if ord(char) > 0xFFFF else 1
    return len(text)


class QtTextObjectController:
    """Resolves text objects for a ``QPlainTextEdit`` and applies them as its selection."""

    def __init__(
        self,
        editor: QPlainTextEdit,
        registry: TextObjectRegistry | None = None,
        *,
        strip_comments: bool = True,
    ) -> None:
        self._editor = editor
        self._strip_comments = strip_comments
        self.inner_objects: dict[str, Resolver] = {}
        self.outer_objects: dict[str, Resolver] = {}
        self.install(registry or build_default_registry())

    @property
    def editor(self) -> QPlainTextEdit:
        return self._editor

    def install(self, registry: TextObjectRegistry) -> None:
        install_text_objects(registry, self.inner_objects, self.outer_objects)

    def snapshot(self) -> DocumentSnapshot:
        return DocumentSnapshot(self._editor.toPlainText(), strip_comments=self._strip_comments)

    def build_request(self, text: str, *, count: int = 1) -> SelectionRequest:
        cursor = self._editor.textCursor()
        if cursor.hasSelection():
            bounds = Span(
                from_qt_position(text, cursor.selectionStart()),
                from_qt_position(text, cursor.selectionEnd()),
            )
            return SelectionRequest(cursor=bounds.start, bounds=bounds, count=count)
        return SelectionRequest(cursor=from_qt_position(text, cursor.position()), count=count)

    def resolve(self, key: str, *, inner: bool = True, count: int = 1) -> Span:
        table = self.inner_objects if inner else self.outer_objects
        resolver = table.get(key)
        if resolver is None:
            raise UnknownObjectError(message=f"No text object bound to {key!r}", key=key)
        document = self.snapshot()
        request = self.build_request(document.text, count=count)
        with preserved_text_cursor(self._editor):
            return resolver(document, request)

    def select_text_object(self, key: str, *, inner: bool = True, count: int = 1) -> Span | None:
        """Select the text object bound to ``key``; return ``None`` when absent."""

        try:
            span = self.resolve(key, inner=inner, count=count)
        except NotFoundError as exc:
            LOGGER.info("Text object %r unavailable: %s", key, exc.message)
            return None
        self.apply_span(span)
        return span

    def apply_span(self, span: Span) -> None:
        text = self._editor.toPlainText()
        span = span.clamp(upper=len(text))
        cursor = self._editor.textCursor()
        cursor.setPosition(to_qt_position(text, span.start))
        cursor.setPosition(to_qt_position(text, span.end), QTextCursor.MoveMode.KeepAnchor)
        self._editor.setTextCursor(cursor)


__all__ = [
    "QtTextObjectController",
    "from_qt_position",
    "preserved_text_cursor",
    "to_qt_position",
]
