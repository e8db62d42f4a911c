"""Core value types shared by resolvers and hosts."""

from .patterns import (
    BRACKET_MATH_CANDIDATES,
    DOLLAR_MATH_CANDIDATES,
    QUOTE_CANDIDATES,
    CandidatePattern,
    Paired,
    Symmetric,
)
from .requests import EnvironmentBounds, MacroEnd, MacroStart, SelectionRequest
from .spans import Span

__all__ = [
    "BRACKET_MATH_CANDIDATES",
    "CandidatePattern",
    "DOLLAR_MATH_CANDIDATES",
    "EnvironmentBounds",
    "MacroEnd",
    "MacroStart",
    "Paired",
    "QUOTE_CANDIDATES",
    "SelectionRequest",
    "Span",
    "Symmetric",
]
