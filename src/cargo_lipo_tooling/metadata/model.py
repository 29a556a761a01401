"""In-memory view of `cargo metadata --format-version 1` (only the fields cargo-lipo reads)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from cargo_lipo_tooling.errors import MetadataError, ResolutionError


@dataclass(frozen=True)
class CargoTarget:
    name: str
    kind: frozenset[str]
    crate_types: frozenset[str]


@dataclass(frozen=True)
class CargoPackage:
    name: str
    targets: tuple[CargoTarget, ...] = ()
    id: str = ""


@dataclass(frozen=True)
class WorkspaceMetadata:
    packages: tuple[CargoPackage, ...]
    workspace_members: tuple[str, ...]
    target_directory: Path

    def package(self, name: str) -> CargoPackage:
        """Package by name; ResolutionError if the workspace has none."""
        for p in self.packages:
            if p.name == name:
                return p
        msg = f"No package metadata found for {name!r}"
        raise ResolutionError(msg)

    @classmethod
    def from_cargo_json(cls, data: dict[str, Any]) -> WorkspaceMetadata:
        """Parse decoded `cargo metadata` JSON. workspace_members ids are mapped to package names."""
        try:
            packages = tuple(
                CargoPackage(
                    name=p["name"],
                    id=p.get("id", p["name"]),
                    targets=tuple(
                        CargoTarget(
                            name=t["name"],
                            kind=frozenset(t.get("kind") or ()),
                            crate_types=frozenset(t.get("crate_types") or ()),
                        )
                        for t in p.get("targets") or ()
                    ),
                )
                for p in data["packages"]
            )
            id_to_name = {p.id: p.name for p in packages}
            members = tuple(
                id_to_name[m] for m in data.get("workspace_members") or () if m in id_to_name
            )
            target_dir = Path(data["target_directory"])
        except (KeyError, TypeError) as e:
            msg = f"Unexpected cargo metadata layout: missing {e}"
            raise MetadataError(msg) from e
        return cls(packages=packages, workspace_members=members, target_directory=target_dir)
