"""Pytest fixtures for cargo_lipo_tooling tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.metadata.model import CargoPackage, CargoTarget, WorkspaceMetadata

# (target name, kind, crate_types)
TargetSpec = tuple[str, list[str], list[str]]


def _meta(
    packages: dict[str, list[TargetSpec]],
    members: list[str] | None = None,
    target_dir: Path = Path("/ws/target"),
) -> WorkspaceMetadata:
    pkgs = tuple(
        CargoPackage(
            name=name,
            id=f"{name} 0.1.0 (path+file:///ws/{name})",
            targets=tuple(
                CargoTarget(name=t, kind=frozenset(k), crate_types=frozenset(c))
                for t, k, c in targets
            ),
        )
        for name, targets in packages.items()
    )
    return WorkspaceMetadata(
        packages=pkgs,
        workspace_members=tuple(members if members is not None else packages),
        target_directory=target_dir,
    )


@pytest.fixture
def make_meta() -> Callable[..., WorkspaceMetadata]:
    """Factory: make_meta({"pkg": [("tgt", ["lib"], ["staticlib"])]}, members=None, target_dir=...)."""
    return _meta


@pytest.fixture
def invocation() -> Invocation:
    """Two iOS targets, debug, no Xcode integration, host check disabled."""
    return Invocation(
        targets=["x86_64-apple-ios", "aarch64-apple-ios"],
        allow_run_on_non_macos=True,
    )


@pytest.fixture(autouse=True)
def _no_cargo_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CARGO", raising=False)
