"""Shared helpers for cargo_lipo_tooling (naming, target paths, YAML load)."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

# --- Naming ---


def normalize_unit_name(target_name: str) -> str:
    """Artifact name for a cargo target: hyphens are not valid in crate file names (my-lib -> my_lib)."""
    return target_name.replace("-", "_")


def quoted_list(items: Iterable[str], sep: str = " or ") -> str:
    """Backtick-quote and join (e.g. ["staticlib", "bin"] -> "`staticlib` or `bin`")."""
    return sep.join(f"`{i}`" for i in items)


# --- Target paths ---


def merged_dir_name(targets: Iterable[str]) -> str:
    """Directory name for a universal artifact: sorted triples joined with '|'. Order-independent."""
    return "|".join(sorted(targets))


def target_artifact_path(target_root: Path, target: str, profile: str, unit_name: str) -> Path:
    """Where cargo leaves the artifact for one triple: {target_root}/{triple}/{profile}/{unit}."""
    return target_root / target / profile / unit_name


def merged_artifact_path(
    target_root: Path, targets: Iterable[str], profile: str, unit_name: str
) -> Path:
    """Where the universal artifact goes: {target_root}/{sorted|joined}/{profile}/{unit}."""
    return target_root / merged_dir_name(targets) / profile / unit_name


# --- YAML ---


def load_yaml_mapping(p: Path) -> dict[str, Any]:
    """Load a YAML file whose document is a mapping. Empty file -> {}. Raises ValueError otherwise."""
    with p.open() as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a mapping at top level of {p}, got {type(data).__name__}"
        raise ValueError(msg)
    return data
