"""Error types raised while resolving text objects.

Only :class:`NotFoundError` (and its :class:`MalformedDocumentError` variant)
crosses the resolver boundary during normal use. A single candidate pattern
failing to match is reported as ``None`` by the matchers and never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class ErrorCode:
    """Constants for error codes surfaced to hosts."""

    NOT_FOUND = "not_found"
    MALFORMED_DOCUMENT = "malformed_document"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN_OBJECT = "unknown_object"


@dataclass
class TextObjectError(Exception):
    """Base exception class for all text object errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
        suggestion: Actionable guidance for recovery.
    """

    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON output."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class NotFoundError(TextObjectError):
    """No enclosing text object of the requested kind exists at the cursor."""

    error_code: str = field(default=ErrorCode.NOT_FOUND)
    message: str = field(default="No such text object here")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Move the cursor inside the construct or pick another object kind")
    kind: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.kind and "kind" not in self.details:
            self.details["kind"] = self.kind
        super().__post_init__()


@dataclass
class MalformedDocumentError(NotFoundError):
    """Delimiters around the cursor are unbalanced.

    Hosts treat this exactly like :class:`NotFoundError`.
    """

    error_code: str = field(default=ErrorCode.MALFORMED_DOCUMENT)
    message: str = field(default="Unbalanced delimiters around the cursor")


@dataclass
class InvalidRequestError(TextObjectError, ValueError):
    """The request does not describe a position inside the document."""

    error_code: str = field(default=ErrorCode.INVALID_REQUEST)
    message: str = field(default="Invalid selection request")


@dataclass
class UnknownObjectError(TextObjectError, KeyError):
    """No resolver is bound to the requested key."""

    error_code: str = field(default=ErrorCode.UNKNOWN_OBJECT)
    message: str = field(default="Unknown text object")
    key: str | None = field(default=None)

    def __post_init__(self) -> None:
        if self.key is not None and "key" not in self.details:
            self.details["key"] = self.key
        super().__post_init__()


__all__ = [
    "ErrorCode",
    "InvalidRequestError",
    "MalformedDocumentError",
    "NotFoundError",
    "TextObjectError",
    "UnknownObjectError",
]
