"""Error types raised by cargo_lipo_tooling. The CLI maps any LipoError to exit code 1."""

from __future__ import annotations


class LipoError(RuntimeError):
    """Base class for fatal errors in a cargo-lipo run."""


class ConfigError(LipoError):
    pass


class MetadataError(LipoError):
    """`cargo metadata` could not be run or its output could not be parsed."""


class ResolutionError(LipoError):
    """No qualifying target, ambiguous targets, or a named package that does not exist."""


class BuildError(LipoError):
    """cargo failed for one (unit, target); the whole unit fails."""

    def __init__(self, unit: str, target: str, reason: str) -> None:
        self.unit = unit
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to build {unit!r} for {target!r}: {reason}")


class MergeError(LipoError):
    """lipo failed or the merged output directory could not be created."""


class XcodeEnvError(LipoError):
    """A required Xcode environment variable is missing or holds an unknown value."""
