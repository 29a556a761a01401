"""cargo invocation and the per-target build driver."""

from .cargo import Cargo, cargo_executable
from .driver import build_targets

__all__ = [
    "Cargo",
    "build_targets",
    "cargo_executable",
]
