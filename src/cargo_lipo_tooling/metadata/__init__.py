"""Cargo workspace metadata: model, `cargo metadata` loader, and universal-target resolution."""

from .load import load_metadata
from .model import CargoPackage, CargoTarget, WorkspaceMetadata
from .resolve import Decision, ResolvedUnit, allowed_crate_types, decide, resolve

__all__ = [
    "CargoPackage",
    "CargoTarget",
    "Decision",
    "ResolvedUnit",
    "WorkspaceMetadata",
    "allowed_crate_types",
    "decide",
    "load_metadata",
    "resolve",
]
