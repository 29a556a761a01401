"""mtime-based check of whether a universal artifact is older than any of its inputs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

log = logging.getLogger(__name__)


def should_update_output(output: Path, inputs: Iterable[Path]) -> bool:
    """True if output is missing/unreadable or any input is strictly newer. OSError if an input can't be stat'ed."""
    try:
        output_mtime = output.stat().st_mtime_ns
    except OSError:
        return True
    for p in inputs:
        if p.stat().st_mtime_ns > output_mtime:
            return True
    return False


def needs_update(output: Path, inputs: Iterable[Path]) -> bool:
    """should_update_output, but an unreadable input logs a warning and answers True."""
    try:
        return should_update_output(output, inputs)
    except OSError as e:
        log.warning("Failed to check if %s is up-to-date: %s", output, e)
        return True
