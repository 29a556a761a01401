"""Run `cargo metadata` and parse its JSON output."""

from __future__ import annotations

import json
import logging
import subprocess
from typing import TYPE_CHECKING

from cargo_lipo_tooling.errors import MetadataError
from cargo_lipo_tooling.metadata.model import WorkspaceMetadata

if TYPE_CHECKING:
    from cargo_lipo_tooling.build.cargo import Cargo

log = logging.getLogger(__name__)


def load_metadata(cargo: Cargo) -> WorkspaceMetadata:
    """`cargo metadata --format-version 1` with the run's manifest/feature flags. Raises MetadataError."""
    cmd = cargo.metadata_command()
    log.debug("Running %s", " ".join(cmd))
    try:
        r = subprocess.run(cmd, capture_output=True, text=True, env=cargo.env())
    except OSError as e:
        msg = f"Failed to run {cmd[0]}: {e}"
        raise MetadataError(msg) from e
    if r.returncode != 0:
        msg = f"cargo metadata failed: {(r.stderr or r.stdout or '').strip()}"
        raise MetadataError(msg)
    try:
        data = json.loads(r.stdout or "")
    except json.JSONDecodeError as e:
        msg = f"cargo metadata returned invalid JSON: {e}"
        raise MetadataError(msg) from e
    return WorkspaceMetadata.from_cargo_json(data)
