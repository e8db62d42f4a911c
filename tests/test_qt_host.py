"""Tests for the PySide6 QPlainTextEdit host."""

from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtWidgets")
pytest.importorskip("pytestqt")

from PySide6.QtGui import QTextCursor  # noqa: E402
from PySide6.QtWidgets import QPlainTextEdit  # noqa: E402

from texobjects.core.spans import Span  # noqa: E402
from texobjects.editor.qt_host import (  # noqa: E402
    QtTextObjectController,
    from_qt_position,
    preserved_text_cursor,
    to_qt_position,
)


@pytest.fixture
def editor(qapp) -> QPlainTextEdit:
    widget = QPlainTextEdit()
    yield widget
    widget.deleteLater()


def _place_cursor(editor: QPlainTextEdit, position: int) -> None:
    cursor = editor.textCursor()
    cursor.setPosition(position)
    editor.setTextCursor(cursor)


def test_select_inner_macro(editor: QPlainTextEdit) -> None:
    editor.setPlainText("\\foo{bar}")
    _place_cursor(editor, 6)
    controller = QtTextObjectController(editor)

    span = controller.select_text_object("m")

    assert span == Span(5, 8)
    assert editor.textCursor().selectedText() == "bar"


def test_selection_is_used_as_bounds(editor: QPlainTextEdit) -> None:
    editor.setPlainText('say "abc" now')
    _place_cursor(editor, 6)
    controller = QtTextObjectController(editor)

    controller.select_text_object('"')
    span = controller.select_text_object('"', inner=False)

    assert span == Span(4, 9)
    assert editor.textCursor().selectedText() == '"abc"'


def test_not_found_keeps_cursor(editor: QPlainTextEdit) -> None:
    editor.setPlainText("nothing here")
    _place_cursor(editor, 3)
    controller = QtTextObjectController(editor)

    assert controller.select_text_object("e") is None
    assert editor.textCursor().position() == 3
    assert not editor.textCursor().hasSelection()


def test_preserved_text_cursor_restores_position(editor: QPlainTextEdit) -> None:
    editor.setPlainText("abcdef")
    _place_cursor(editor, 2)

    with preserved_text_cursor(editor):
        cursor = editor.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)
        editor.setTextCursor(cursor)

    assert editor.textCursor().position() == 2


def test_astral_characters_map_to_qt_positions(editor: QPlainTextEdit) -> None:
    text = "\U0001F600 $x$"
    editor.setPlainText(text)
    _place_cursor(editor, to_qt_position(text, 3))
    controller = QtTextObjectController(editor)

    span = controller.select_text_object("$")

    assert span == Span(3, 4)
    assert editor.textCursor().selectedText() == "x"


def test_position_conversion_round_trip() -> None:
    text = "\U0001F600$x$"

    assert to_qt_position(text, 2) == 3
    assert from_qt_position(text, 3) == 2
    assert from_qt_position(text, 99) == len(text)


def test_apply_span_clamps_to_document(editor: QPlainTextEdit) -> None:
    editor.setPlainText("abc")
    controller = QtTextObjectController(editor)

    controller.apply_span(Span(1, 10))

    assert editor.textCursor().selectedText() == "bc"
