"""Merge per-target artifacts into one universal artifact with `lipo -create`.

The output lives at {target_root}/{sorted triples joined by '|'}/{profile}/{unit}, so the same
target set maps to the same path whatever order it was requested in. Inputs are handed to lipo
in the requested order. A single input is returned as-is: no lipo call and no merged directory.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from cargo_lipo_tooling.build.cargo import Cargo
from cargo_lipo_tooling.build.driver import build_targets
from cargo_lipo_tooling.errors import MergeError
from cargo_lipo_tooling.helpers import merged_artifact_path
from cargo_lipo_tooling.lipo.freshness import needs_update
from cargo_lipo_tooling.metadata.resolve import ResolvedUnit

log = logging.getLogger(__name__)


def lipo_command(lipo: str, output: Path, inputs: Sequence[Path]) -> list[str]:
    return [lipo, "-create", "-output", str(output), *(str(p) for p in inputs)]


def merge(
    unit: ResolvedUnit,
    targets: Sequence[str],
    inputs: Sequence[Path],
    target_root: Path,
    profile: str,
    lipo: str = "lipo",
) -> Path:
    """Return the universal artifact path for unit, running lipo only when it is stale. Raises MergeError."""
    if not inputs:
        msg = f"No inputs to merge for {unit.name!r}"
        raise MergeError(msg)
    if len(inputs) == 1:
        return inputs[0]

    output = merged_artifact_path(target_root, targets, profile, unit.name)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f'Creating output directory "{output.parent}" failed: {e}'
        raise MergeError(msg) from e

    if not needs_update(output, inputs):
        log.info("Universal artifact is up-to-date, skipping lipo invocation for %s", unit.name)
        print(f"✅ {unit.name} is up-to-date: {output}")
        return output

    cmd = lipo_command(lipo, output, inputs)
    log.info("Creating universal artifact for %s", unit.name)
    log.debug("Running %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        msg = f"Failed to run {lipo}: {e}"
        raise MergeError(msg) from e
    if r.returncode != 0:
        msg = f"lipo failed for {unit.name!r}: {(r.stderr or r.stdout or '').strip()}"
        raise MergeError(msg)
    print(f"✅ Created universal artifact for {unit.name}: {output}")
    return output


def build_one(
    cargo: Cargo,
    unit: ResolvedUnit,
    target_root: Path,
    targets: Sequence[str],
    lipo: str = "lipo",
) -> Path:
    """Build unit for every target, then merge. Returns the artifact path to ship."""
    inputs = build_targets(cargo, unit, target_root, targets)
    return merge(unit, targets, inputs, target_root, cargo.profile, lipo=lipo)
