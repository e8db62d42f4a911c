"""Boundary primitives for macro calls, environments and brace groups.

All queries are pure functions of the snapshot: the scanner never moves a
cursor, it only reports offsets (or ``None`` when the structure is absent or
unbalanced).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .snapshot import DocumentSnapshot

LOGGER = logging.getLogger(__name__)

MACRO_NAME_HEAD = re.compile(r"[A-Za-z@]")
MACRO_NAME_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz@*")
_ENV_TOKEN = re.compile(r"\\(?P<which>begin|end)\s*\{(?P<name>[^{}]*)\}")
_CLOSERS = {"{": "}", "[": "]"}


@dataclass(slots=True, frozen=True)
class MacroCall:
    """A macro invocation and the extent of its adjacent argument groups."""

    start: int
    name_end: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass(slots=True, frozen=True)
class EnvironmentBlock:
    """A matched ``\\begin{name}`` / ``\\end{name}`` pair.

    ``end_brace`` is the index of the closing brace of ``\\end{name}``.
    """

    name: str
    begin_start: int
    end_brace: int

    def contains(self, offset: int) -> bool:
        return self.begin_start <= offset <= self.end_brace


class StructureScanner:
    """Locates structural boundaries inside a :class:`DocumentSnapshot`."""

    def __init__(self, document: DocumentSnapshot) -> None:
        self._document = document
        self._macros: list[MacroCall] | None = None
        self._environments: list[EnvironmentBlock] | None = None

    @property
    def document(self) -> DocumentSnapshot:
        return self._document

    # ------------------------------------------------------------------
    # Macro calls
    # ------------------------------------------------------------------
    def macro_calls(self) -> list[MacroCall]:
        if self._macros is None:
            self._macros = self._scan_macros()
        return self._macros

    def enclosing_macro(self, cursor: int) -> MacroCall | None:
        """Return the innermost macro invocation whose extent contains ``cursor``."""

        best: MacroCall | None = None
        for call in self.macro_calls():
            if call.start > cursor:
                break
            if call.contains(cursor) and (best is None or call.start >= best.start):
                best = call
        return best

    def find_macro_start(self, cursor: int) -> int | None:
        call = self.enclosing_macro(cursor)
        return call.start if call is not None else None

    def find_macro_end(self, cursor: int) -> int | None:
        call = self.enclosing_macro(cursor)
        return call.end if call is not None else None

    # ------------------------------------------------------------------
    # Environments
    # ------------------------------------------------------------------
    def environments(self) -> list[EnvironmentBlock]:
        if self._environments is None:
            self._environments = self._scan_environments()
        return self._environments

    def enclosing_environment(self, cursor: int, count: int = 1) -> EnvironmentBlock | None:
        """Return the ``count``-th innermost environment around ``cursor``."""

        enclosing = [block for block in self.environments() if block.contains(cursor)]
        if len(enclosing) < count:
            return None
        enclosing.sort(key=lambda block: block.begin_start, reverse=True)
        return enclosing[count - 1]

    def find_matching_env_begin(self, cursor: int, count: int = 1) -> int | None:
        block = self.enclosing_environment(cursor, count)
        return block.begin_start if block is not None else None

    def find_matching_env_end(self, cursor: int, count: int = 1) -> int | None:
        block = self.enclosing_environment(cursor, count)
        return block.end_brace if block is not None else None

    # ------------------------------------------------------------------
    # Balanced groups
    # ------------------------------------------------------------------
    def scan_balanced_forward(self, open_index: int) -> int | None:
        """Return the index of the bracket closing the group opened at ``open_index``.

        Square-bracket groups only count brackets outside nested brace groups.
        """

        code = self._document.code_text
        opener = self._document.char_at(open_index)
        closer = _CLOSERS.get(opener)
        if closer is None or self._document.is_escaped(open_index):
            return None
        depth = 0
        braces = 0
        index = open_index
        while index < len(code):
            char = code[index]
            if char == "\\":
                index += 2
                continue
            if opener == "{":
                if char == "{":
                    depth += 1
                elif char == "}":
                    depth -= 1
                    if depth == 0:
                        return index
            else:
                if char == "{":
                    braces += 1
                elif char == "}":
                    braces -= 1
                    if braces < 0:
                        return None
                elif braces == 0 and char == "[":
                    depth += 1
                elif braces == 0 and char == "]":
                    depth -= 1
                    if depth == 0:
                        return index
            index += 1
        return None

    def scan_balanced_backward(self, close_index: int) -> int | None:
        """Return the index of the ``{`` matching the ``}`` at ``close_index``."""

        code = self._document.code_text
        if self._document.char_at(close_index) != "}" or self._document.is_escaped(close_index):
            return None
        depth = 0
        index = close_index
        while index >= 0:
            char = code[index]
            if char in "{}" and not self._document.is_escaped(index):
                depth += 1 if char == "}" else -1
                if depth == 0:
                    return index
            index -= 1
        return None

    def scan_backslash_backward(self, index: int) -> int | None:
        """Return the offset of the nearest backslash at or before ``index``."""

        found = self._document.code_text.rfind("\\", 0, max(0, index) + 1)
        return found if found >= 0 else None

    def scan_char_forward(self, index: int, char: str) -> int | None:
        """Return the offset of the first ``char`` at or after ``index``."""

        found = self._document.code_text.find(char, max(0, index))
        return found if found >= 0 else None

    # ------------------------------------------------------------------
    # Internal scans
    # ------------------------------------------------------------------
    def _scan_macros(self) -> list[MacroCall]:
        code = self._document.code_text
        calls: list[MacroCall] = []
        index = 0
        length = len(code)
        while index < length:
            if code[index] != "\\":
                index += 1
                continue
            if index + 1 >= length or not MACRO_NAME_HEAD.match(code[index + 1]):
                # Control symbol such as \\ or \{; the escaped character is not a macro.
                index += 2
                continue
            name_end = index + 1
            while name_end < length and code[name_end] in MACRO_NAME_CHARS:
                name_end += 1
            calls.append(MacroCall(start=index, name_end=name_end, end=self._argument_end(name_end)))
            index = name_end
        return calls

    def _argument_end(self, position: int) -> int:
        end = position
        while self._document.char_at(end) in _CLOSERS:
            close = self.scan_balanced_forward(end)
            if close is None:
                break
            end = close + 1
        return end

    def _scan_environments(self) -> list[EnvironmentBlock]:
        blocks: list[EnvironmentBlock] = []
        stack: list[tuple[str, int]] = []
        for match in _ENV_TOKEN.finditer(self._document.code_text):
            if self._document.is_escaped(match.start()):
                continue
            name = match.group("name").strip()
            if match.group("which") == "begin":
                stack.append((name, match.start()))
                continue
            depth = _find_open(stack, name)
            if depth is None:
                LOGGER.debug("Ignoring stray \\end{%s} at offset %d", name, match.start())
                continue
            dropped = stack[depth + 1 :]
            if dropped:
                LOGGER.debug("Dropping %d unclosed environment(s) before \\end{%s}", len(dropped), name)
            _, begin_start = stack[depth]
            del stack[depth:]
            blocks.append(EnvironmentBlock(name=name, begin_start=begin_start, end_brace=match.end() - 1))
        blocks.sort(key=lambda block: block.begin_start)
        return blocks


def _find_open(stack: list[tuple[str, int]], name: str) -> int | None:
    for depth in range(len(stack) - 1, -1, -1):
        if stack[depth][0] == name:
            return depth
    return None


__all__ = ["EnvironmentBlock", "MacroCall", "StructureScanner"]
