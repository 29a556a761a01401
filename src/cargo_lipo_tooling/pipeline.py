"""Top-level cargo-lipo run: load workspace metadata, resolve units, build each one."""

from __future__ import annotations

import logging
import platform
from collections.abc import Mapping
from pathlib import Path

from cargo_lipo_tooling.build.cargo import Cargo
from cargo_lipo_tooling.errors import LipoError
from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.lipo.merge import build_one
from cargo_lipo_tooling.metadata.load import load_metadata
from cargo_lipo_tooling.metadata.model import WorkspaceMetadata
from cargo_lipo_tooling.metadata.resolve import resolve
from cargo_lipo_tooling.xcode.integ import integ

log = logging.getLogger(__name__)


def check_host(invocation: Invocation, system: str | None = None) -> None:
    """lipo ships with Xcode; refuse other hosts unless explicitly allowed."""
    system = system or platform.system()
    if system == "Darwin" or invocation.allow_run_on_non_macos:
        return
    msg = (
        f"cargo-lipo requires macOS (lipo is part of Xcode), host is {system}. "
        "Pass --allow-run-on-non-macos to try anyway."
    )
    raise LipoError(msg)


def run(
    invocation: Invocation,
    meta: WorkspaceMetadata | None = None,
    env: Mapping[str, str] | None = None,
) -> list[Path]:
    """Build every resolved unit. Returns the produced artifact paths (copied paths under Xcode)."""
    check_host(invocation)
    if meta is None:
        meta = load_metadata(Cargo(invocation, environ=env))
    units = resolve(invocation.packages, invocation.all, invocation.allow_bin, meta)
    target_root = meta.target_directory
    log.debug("Target directory %s, targets %s", target_root, invocation.targets)

    outputs: list[Path] = []
    for unit in units:
        if invocation.xcode_integ:
            dest = integ(unit, target_root, invocation, env)
            if dest is not None:
                outputs.append(dest)
            continue
        cargo = Cargo(invocation, environ=env)
        outputs.append(build_one(cargo, unit, target_root, invocation.targets, lipo=invocation.lipo))
    return outputs
