"""Options for one cargo-lipo run, built from resolved config."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Invocation:
    targets: list[str] = field(default_factory=list)
    release: bool = False
    all: bool = False
    packages: list[str] = field(default_factory=list)
    allow_bin: bool = False
    features: str | None = None
    all_features: bool = False
    no_default_features: bool = False
    manifest_path: Path | None = None
    xcode_integ: bool = False
    sanitize_env: bool = True
    allow_run_on_non_macos: bool = False
    lipo: str = "lipo"
    color: str | None = None
    verbose: int = 0

    @property
    def profile(self) -> str:
        """cargo output subdirectory for this run."""
        return "release" if self.release else "debug"

    @classmethod
    def from_config(cls, cfg: dict[str, Any], **extra: Any) -> Invocation:
        """Build from a resolve_config() dict; extra carries CLI-only options (color, verbose)."""
        manifest = cfg.get("manifest_path")
        return cls(
            targets=list(cfg["targets"]),
            release=cfg["release"],
            all=cfg["all"],
            packages=list(cfg["packages"]),
            allow_bin=cfg["allow_bin"],
            features=cfg["features"],
            all_features=cfg["all_features"],
            no_default_features=cfg["no_default_features"],
            manifest_path=Path(manifest) if manifest else None,
            xcode_integ=cfg["xcode_integ"],
            sanitize_env=cfg["sanitize_env"],
            allow_run_on_non_macos=cfg["allow_run_on_non_macos"],
            lipo=cfg["lipo"],
            **extra,
        )
