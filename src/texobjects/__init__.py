"""LaTeX-aware text objects: quotes, math, macro calls and environments.

Resolvers take an immutable :class:`DocumentSnapshot` plus a
:class:`SelectionRequest` and return the :class:`Span` to select, raising
:class:`NotFoundError` when no such object encloses the cursor.
"""

from .core import (
    BRACKET_MATH_CANDIDATES,
    DOLLAR_MATH_CANDIDATES,
    QUOTE_CANDIDATES,
    CandidatePattern,
    Paired,
    SelectionRequest,
    Span,
    Symmetric,
)
from .documents import DocumentSnapshot, StructureScanner
from .errors import (
    ErrorCode,
    InvalidRequestError,
    MalformedDocumentError,
    NotFoundError,
    TextObjectError,
    UnknownObjectError,
)
from .registry import (
    TextObjectBinding,
    TextObjectKind,
    TextObjectRegistry,
    build_default_registry,
    install_text_objects,
)
from .resolvers import BlockSelector, EnvironmentResolver, MacroResolver

__version__ = "0.1.0"

__all__ = [
    "BRACKET_MATH_CANDIDATES",
    "BlockSelector",
    "CandidatePattern",
    "DOLLAR_MATH_CANDIDATES",
    "DocumentSnapshot",
    "EnvironmentResolver",
    "ErrorCode",
    "InvalidRequestError",
    "MacroResolver",
    "MalformedDocumentError",
    "NotFoundError",
    "Paired",
    "QUOTE_CANDIDATES",
    "SelectionRequest",
    "Span",
    "StructureScanner",
    "Symmetric",
    "TextObjectBinding",
    "TextObjectError",
    "TextObjectKind",
    "TextObjectRegistry",
    "UnknownObjectError",
    "build_default_registry",
    "install_text_objects",
]
