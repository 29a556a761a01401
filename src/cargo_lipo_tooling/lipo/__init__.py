"""Freshness check and lipo merge for universal artifacts."""

from .freshness import needs_update, should_update_output
from .merge import build_one, lipo_command, merge

__all__ = [
    "build_one",
    "lipo_command",
    "merge",
    "needs_update",
    "should_update_output",
]
