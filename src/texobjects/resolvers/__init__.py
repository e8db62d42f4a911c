"""Resolvers turning a :class:`~texobjects.core.SelectionRequest` into a span."""

from .block_selector import BlockSelector
from .environments import EnvironmentResolver
from .macros import MacroResolver

__all__ = ["BlockSelector", "EnvironmentResolver", "MacroResolver"]
