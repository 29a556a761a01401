"""Pick, per package, the single staticlib (or bin) target to build as a universal artifact.

With explicit package names every named package must yield exactly one qualifying target.
Without them all workspace members are considered; a qualifying target is required only for a
single-member workspace when --all was not given, otherwise members without one are skipped.
A package with more than one candidate target is always an error.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cargo_lipo_tooling.errors import ResolutionError
from cargo_lipo_tooling.helpers import normalize_unit_name, quoted_list
from cargo_lipo_tooling.metadata.model import CargoTarget, WorkspaceMetadata

log = logging.getLogger(__name__)

STATICLIB = "staticlib"
BIN = "bin"
LIB = "lib"


@dataclass(frozen=True)
class ResolvedUnit:
    package: str
    name: str


class Decision(enum.Enum):
    ACCEPT = "accept"
    SKIP = "skip"
    FAIL = "fail"


def decide(present: bool, required: bool) -> Decision:
    """present -> ACCEPT; absent -> FAIL when required, SKIP otherwise."""
    if present:
        return Decision.ACCEPT
    return Decision.FAIL if required else Decision.SKIP


def allowed_crate_types(allow_bin: bool) -> tuple[str, ...]:
    return (STATICLIB, BIN) if allow_bin else (STATICLIB,)


def _is_candidate(t: CargoTarget, allowed: tuple[str, ...]) -> bool:
    # A plain `lib` kind only counts when its crate types include an allowed one.
    if t.kind.intersection(allowed):
        return True
    return LIB in t.kind and bool(t.crate_types.intersection(allowed))


def _candidate_targets(
    targets: Sequence[CargoTarget], allowed: tuple[str, ...]
) -> list[CargoTarget]:
    return [t for t in targets if _is_candidate(t, allowed)]


def resolve(
    packages: Sequence[str] | None,
    build_all: bool,
    allow_bin: bool,
    meta: WorkspaceMetadata,
) -> list[ResolvedUnit]:
    """Resolve the units to build. Raises ResolutionError naming the offending package(s)."""
    allowed = allowed_crate_types(allow_bin)
    allowed_str = quoted_list(allowed)

    if packages:
        names = list(dict.fromkeys(packages))
        required = True
    else:
        names = list(meta.workspace_members)
        required = len(names) == 1 and not build_all

    log.debug(
        "Considering package(s) %s, %s %s",
        names,
        allowed_str,
        "required" if required else "not required",
    )

    units: list[ResolvedUnit] = []
    for name in names:
        package = meta.package(name)
        candidates = _candidate_targets(package.targets, allowed)

        if len(candidates) > 1:
            msg = f"Found multiple lib targets for {name!r}"
            raise ResolutionError(msg)

        if not candidates:
            decision = decide(False, required)
            failure = f"No library target found for {name!r}"
            skip_reason = f"it does not have a {allowed_str} target"
        else:
            (target,) = candidates
            decision = decide(bool(target.crate_types.intersection(allowed)), required)
            failure = f"No {allowed_str} crate type found for {name!r}"
            skip_reason = f"it does not have a {allowed_str} crate type"

        if decision is Decision.FAIL:
            raise ResolutionError(failure)
        if decision is Decision.SKIP:
            log.debug("Ignoring %r because %s", name, skip_reason)
            continue
        unit = ResolvedUnit(package=name, name=normalize_unit_name(target.name))
        clash = next((u for u in units if u.name == unit.name), None)
        if clash is not None:
            msg = f"Packages {clash.package!r} and {name!r} both produce {unit.name!r}"
            raise ResolutionError(msg)
        units.append(unit)

    if not units:
        msg = f"Did not find any packages with a {allowed_str} target, considered {names}"
        raise ResolutionError(msg)

    log.info("Will build universal library for %s", [u.name for u in units])
    return units
