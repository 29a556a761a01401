"""Read Xcode build-phase environment variables and map them to cargo-lipo inputs.

ARCHS uses Xcode arch names (arm64, x86_64, ...); they are mapped to Rust target triples for the
platform in PLATFORM_NAME (macosx -> apple-darwin, anything else -> apple-ios).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from cargo_lipo_tooling.errors import XcodeEnvError

# Xcode arch -> Rust arch. Exhaustive; anything else is an error.
ARCH_MAP: dict[str, str] = {
    "armv7": "armv7",
    "arm64": "aarch64",
    "i386": "i386",
    "x86_64": "x86_64",
}

PLATFORM_SUFFIXES: dict[str, str] = {
    "macosx": "apple-darwin",
    "iphoneos": "apple-ios",
    "iphonesimulator": "apple-ios",
}
DEFAULT_PLATFORM_SUFFIX = "apple-ios"

SUPPORTED_ACTIONS = frozenset({"build", "install"})

# Leaking these into child cargo builds breaks cross-compiling build scripts.
_SANITIZE_SUFFIX = "DEPLOYMENT_TARGET"
_SANITIZE_PREFIX = "SDK"


def _require(env: Mapping[str, str], name: str) -> str:
    value = env.get(name)
    if value is None:
        msg = f"Failed to read ${name}: not set"
        raise XcodeEnvError(msg)
    return value


def is_release_configuration(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get("CONFIGURATION") == "Release"


def action_from_env(env: Mapping[str, str] | None = None) -> str:
    return _require(os.environ if env is None else env, "ACTION")


def platform_suffix(platform_name: str | None) -> str:
    return PLATFORM_SUFFIXES.get(platform_name or "", DEFAULT_PLATFORM_SUFFIX)


def map_arch_to_target(arch: str, suffix: str) -> str:
    """arm64 + apple-ios -> aarch64-apple-ios. XcodeEnvError for an arch not in ARCH_MAP."""
    try:
        mapped = ARCH_MAP[arch]
    except KeyError:
        msg = f"Unknown arch: {arch!r} (expected one of {', '.join(ARCH_MAP)})"
        raise XcodeEnvError(msg) from None
    return f"{mapped}-{suffix}"


def targets_from_env(env: Mapping[str, str] | None = None) -> list[str]:
    """Rust triples for $ARCHS (space-separated) on $PLATFORM_NAME, in $ARCHS order."""
    env = os.environ if env is None else env
    archs = _require(env, "ARCHS")
    suffix = platform_suffix(env.get("PLATFORM_NAME"))
    try:
        return [map_arch_to_target(a, suffix) for a in archs.split()]
    except XcodeEnvError as e:
        msg = f"Failed to parse $ARCHS: {e}"
        raise XcodeEnvError(msg) from e


def executable_path_from_env(env: Mapping[str, str] | None = None) -> Path:
    """$BUILT_PRODUCTS_DIR/$EXECUTABLE_PATH."""
    env = os.environ if env is None else env
    return Path(_require(env, "BUILT_PRODUCTS_DIR")) / _require(env, "EXECUTABLE_PATH")


def sanitized_env(env: Mapping[str, str] | None = None) -> dict[str, str]:
    """Copy of env without *DEPLOYMENT_TARGET and SDK* variables."""
    env = os.environ if env is None else env
    return {
        k: v
        for k, v in env.items()
        if not (k.endswith(_SANITIZE_SUFFIX) or k.startswith(_SANITIZE_PREFIX))
    }
