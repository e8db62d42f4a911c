"""Headless editor host that resolves text objects against an in-memory buffer."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

from ..core.requests import SelectionRequest
from ..core.spans import Span
from ..documents.snapshot import DocumentSnapshot
from ..errors import NotFoundError, UnknownObjectError
from ..registry import Resolver, TextObjectRegistry, build_default_registry, install_text_objects

LOGGER = logging.getLogger(__name__)


class SelectionListener(Protocol):
    """Callback invoked when a text object becomes the active selection."""

    def __call__(self, selection: Span, key: str) -> None:
        ...


class TextBuffer:
    """Plain-text buffer with a cursor, an optional selection and text object maps."""

    def __init__(
        self,
        text: str = "",
        *,
        cursor: int = 0,
        registry: TextObjectRegistry | None = None,
        strip_comments: bool = True,
    ) -> None:
        self._text = text
        self._cursor = 0
        self._selection: Span | None = None
        self._strip_comments = strip_comments
        self._snapshot: DocumentSnapshot | None = None
        self._listeners: list[SelectionListener] = []
        self.inner_objects: dict[str, Resolver] = {}
        self.outer_objects: dict[str, Resolver] = {}
        self.move_to(cursor)
        self.install(registry or build_default_registry())

    # ------------------------------------------------------------------
    # Buffer state
    # ------------------------------------------------------------------
    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def selection(self) -> Span | None:
        return self._selection

    def set_text(self, text: str) -> None:
        self._text = text or ""
        self._snapshot = None
        self._selection = None
        self._cursor = min(self._cursor, len(self._text))

    def move_to(self, offset: int) -> None:
        """Place the cursor at ``offset`` and drop any selection."""

        self._cursor = self.snapshot().validate_offset(offset)
        self._selection = None

    def set_selection(self, span: Span | None) -> None:
        if span is None:
            self._selection = None
            return
        if span.is_caret:
            self.move_to(span.start)
            return
        self.snapshot().validate_span(span)
        self._selection = span
        self._cursor = span.end

    def snapshot(self) -> DocumentSnapshot:
        if self._snapshot is None:
            self._snapshot = DocumentSnapshot(self._text, strip_comments=self._strip_comments)
        return self._snapshot

    def add_selection_listener(self, listener: SelectionListener) -> None:
        self._listeners.append(listener)

    @contextmanager
    def preserved_cursor(self) -> Iterator[int]:
        """Restore the cursor and selection however the enclosed block exits."""

        cursor, selection = self._cursor, self._selection
        try:
            yield cursor
        finally:
            self._cursor, self._selection = cursor, selection

    # ------------------------------------------------------------------
    # Text objects
    # ------------------------------------------------------------------
    def install(self, registry: TextObjectRegistry) -> None:
        install_text_objects(registry, self.inner_objects, self.outer_objects)

    def build_request(self, *, count: int = 1) -> SelectionRequest:
        bounds = self._selection
        cursor = bounds.start if bounds is not None else self._cursor
        return SelectionRequest(cursor=cursor, bounds=bounds, count=count)

    def resolve(self, key: str, *, inner: bool = True, count: int = 1) -> Span:
        """Return the text object span for ``key`` without changing the selection."""

        table = self.inner_objects if inner else self.outer_objects
        resolver = table.get(key)
        if resolver is None:
            raise UnknownObjectError(message=f"No text object bound to {key!r}", key=key)
        request = self.build_request(count=count)
        with self.preserved_cursor():
            return resolver(self.snapshot(), request)

    def select_text_object(self, key: str, *, inner: bool = True, count: int = 1) -> Span:
        """Resolve ``key`` and make the result the active selection."""

        try:
            span = self.resolve(key, inner=inner, count=count)
        except NotFoundError as exc:
            LOGGER.info("Text object %r unavailable at offset %d: %s", key, self._cursor, exc.message)
            raise
        self.set_selection(span)
        for listener in list(self._listeners):
            listener(span, key)
        return span

    def selected_text(self) -> str:
        if self._selection is None:
            return ""
        return self._selection.slice(self._text)


__all__ = ["SelectionListener", "TextBuffer"]
