"""Xcode "Run Script" build phase: build the unit for $ARCHS and copy it to the product path.

Only the build and install actions do work. Any other $ACTION (clean, analyze, ...) is logged and
ignored so that the surrounding Xcode build keeps going.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import shutil
from collections.abc import Mapping
from pathlib import Path

from cargo_lipo_tooling.build.cargo import Cargo
from cargo_lipo_tooling.errors import LipoError
from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.lipo.merge import build_one
from cargo_lipo_tooling.metadata.resolve import ResolvedUnit
from cargo_lipo_tooling.xcode.env import (
    SUPPORTED_ACTIONS,
    action_from_env,
    executable_path_from_env,
    is_release_configuration,
    targets_from_env,
)

log = logging.getLogger(__name__)


def _clone_or_copy(src: Path, dst: Path) -> None:
    """copy_file_range (reflink on CoW filesystems) where available, else a full byte copy."""
    if hasattr(os, "copy_file_range"):
        try:
            with src.open("rb") as fin, dst.open("wb") as fout:
                remaining = os.fstat(fin.fileno()).st_size
                while remaining > 0:
                    n = os.copy_file_range(fin.fileno(), fout.fileno(), remaining)
                    if n == 0:
                        break
                    remaining -= n
            if remaining == 0:
                shutil.copymode(src, dst)
                return
        except OSError as e:
            if not src.exists():
                raise
            log.debug("copy_file_range %s -> %s failed (%s), falling back to copy", src, dst, e)
    shutil.copy2(src, dst)


def copy_file(src: Path, dest: Path) -> None:
    """Replace dest with a copy of src, creating parent dirs. Raises LipoError.

    The old dest is removed first; new content is written beside it and renamed into place, so
    dest never holds a partial file. If the copy fails, dest is left absent.
    """
    try:
        dest.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        msg = f"Removing existing {dest} failed: {e}"
        raise LipoError(msg) from e
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Creating directory for dest file {dest} failed: {e}"
        raise LipoError(msg) from e

    tmp = dest.with_name(f".{dest.name}.cargo-lipo.tmp")
    try:
        _clone_or_copy(src, tmp)
        tmp.replace(dest)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        msg = f"Failed to copy from {src} to {dest}: {e}"
        raise LipoError(msg) from e


def dispatch(env: Mapping[str, str]) -> bool:
    """True if $ACTION should build; False (with a warning) for actions cargo-lipo ignores."""
    action = action_from_env(env)
    if action in SUPPORTED_ACTIONS:
        return True
    log.warning("Unsupported Xcode action: %r", action)
    return False


def integ(
    unit: ResolvedUnit,
    target_root: Path,
    invocation: Invocation,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    """Run the build phase for unit. Returns the copied product path, or None if the action was ignored."""
    env = os.environ if env is None else env
    if is_release_configuration(env):
        invocation = dataclasses.replace(invocation, release=True)

    if not dispatch(env):
        return None

    targets = targets_from_env(env)
    dest = executable_path_from_env(env)
    cargo = Cargo(invocation, environ=env)
    output = build_one(cargo, unit, target_root, targets, lipo=invocation.lipo)
    copy_file(output, dest)
    print(f"✅ Copied {unit.name} -> {dest}")
    return dest
