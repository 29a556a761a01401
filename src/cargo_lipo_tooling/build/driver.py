"""Build one unit once per target triple, in the given order, stopping at the first failure."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from cargo_lipo_tooling.build.cargo import Cargo
from cargo_lipo_tooling.errors import ConfigError
from cargo_lipo_tooling.helpers import target_artifact_path
from cargo_lipo_tooling.metadata.resolve import ResolvedUnit

log = logging.getLogger(__name__)


def build_targets(
    cargo: Cargo,
    unit: ResolvedUnit,
    target_root: Path,
    targets: Sequence[str],
) -> list[Path]:
    """Per-target artifact paths, in targets order. Paths are derived, not checked for existence."""
    if not targets:
        msg = f"No target to build for {unit.name!r}"
        raise ConfigError(msg)
    inputs: list[Path] = []
    for target in targets:
        log.info("Building %r for %r", unit.name, target)
        print(f"🔨 Building {unit.name} for {target}")
        cargo.build(unit.package, unit.name, target)
        inputs.append(target_artifact_path(target_root, target, cargo.profile, unit.name))
    return inputs
