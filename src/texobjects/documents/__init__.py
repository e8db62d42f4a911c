"""Document snapshots and the scanning primitives that query them."""

from .delimiters import MatchStrategy, match_paired, match_symmetric, strategy_for
from .snapshot import DocumentSnapshot
from .structure import StructureScanner

__all__ = [
    "DocumentSnapshot",
    "MatchStrategy",
    "StructureScanner",
    "match_paired",
    "match_symmetric",
    "strategy_for",
]
