"""Command lines for cargo (build per target, metadata) derived from one Invocation."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path

from cargo_lipo_tooling.errors import BuildError
from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.xcode.env import sanitized_env

log = logging.getLogger(__name__)


def cargo_executable() -> str:
    """$CARGO when running as `cargo lipo`, else cargo from PATH."""
    return os.environ.get("CARGO") or "cargo"


class Cargo:
    def __init__(
        self,
        invocation: Invocation,
        executable: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.invocation = invocation
        self.executable = executable or cargo_executable()
        self.environ = environ

    @property
    def profile(self) -> str:
        return self.invocation.profile

    def _common_args(self) -> list[str]:
        inv = self.invocation
        args: list[str] = []
        if inv.manifest_path is not None:
            args += ["--manifest-path", str(inv.manifest_path)]
        if inv.features:
            args += ["--features", inv.features]
        if inv.all_features:
            args.append("--all-features")
        if inv.no_default_features:
            args.append("--no-default-features")
        return args

    def build_command(self, package: str, target: str) -> list[str]:
        inv = self.invocation
        cmd = [self.executable, "build", "--target", target, "-p", package]
        if inv.release:
            cmd.append("--release")
        cmd += self._common_args()
        if inv.color:
            cmd += ["--color", inv.color]
        if inv.verbose:
            cmd.append("-" + "v" * inv.verbose)
        return cmd

    def metadata_command(self) -> list[str]:
        return [self.executable, "metadata", "--format-version", "1", *self._common_args()]

    def env(self) -> dict[str, str] | None:
        """Child environment: sanitized under Xcode integration unless disabled, else inherited (None)."""
        if self.invocation.xcode_integ and self.invocation.sanitize_env:
            return sanitized_env(self.environ)
        return dict(self.environ) if self.environ is not None else None

    def build(self, package: str, unit_name: str, target: str, cwd: Path | None = None) -> None:
        """Run cargo build for one target. Raises BuildError naming unit and target."""
        cmd = self.build_command(package, target)
        log.debug("Running %s", " ".join(cmd))
        try:
            r = subprocess.run(cmd, cwd=str(cwd) if cwd else None, env=self.env())
        except OSError as e:
            raise BuildError(unit_name, target, f"failed to run {self.executable}: {e}") from e
        if r.returncode != 0:
            raise BuildError(unit_name, target, f"cargo exited with status {r.returncode}")
