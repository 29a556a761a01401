"""Xcode build-phase integration. The build/copy shim lives in xcode.integ (imports the build stack)."""

from .env import (
    ARCH_MAP,
    executable_path_from_env,
    is_release_configuration,
    map_arch_to_target,
    sanitized_env,
    targets_from_env,
)

__all__ = [
    "ARCH_MAP",
    "executable_path_from_env",
    "is_release_configuration",
    "map_arch_to_target",
    "sanitized_env",
    "targets_from_env",
]
