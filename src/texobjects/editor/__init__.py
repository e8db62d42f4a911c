"""Editor hosts applying resolved text objects as selections."""

from importlib import import_module
from typing import Any

from . import buffer
from .buffer import TextBuffer

__all__ = ["TextBuffer", "buffer"]


def __getattr__(name: str) -> Any:
	if name == "qt_host":
		module = import_module(f"{__name__}.{name}")
		globals()[name] = module
		return module
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
