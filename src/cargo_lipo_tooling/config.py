"""cargo-lipo configuration: defaults, optional YAML file, command-line overrides."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from cargo_lipo_tooling.errors import ConfigError
from cargo_lipo_tooling.helpers import load_yaml_mapping

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "cargo-lipo.yaml"

DEFAULT_TARGETS: list[str] = ["aarch64-apple-ios", "x86_64-apple-ios"]

DEFAULT_CONFIG: dict[str, Any] = {
    "targets": DEFAULT_TARGETS,
    "release": False,
    "all": False,
    "packages": [],
    "allow_bin": False,
    "features": None,
    "all_features": False,
    "no_default_features": False,
    "manifest_path": None,
    "xcode_integ": False,
    "sanitize_env": True,
    "allow_run_on_non_macos": False,
    "lipo": "lipo",
}

_LIST_KEYS = frozenset({"targets", "packages"})
_BOOL_KEYS = frozenset(k for k, v in DEFAULT_CONFIG.items() if isinstance(v, bool))


def _coerce(key: str, value: Any) -> Any:
    if key in _LIST_KEYS:
        if isinstance(value, str):
            return [t.strip() for t in value.split(",") if t.strip()]
        if not isinstance(value, list):
            msg = f"{key} must be a list or comma-separated string, got {value!r}"
            raise ConfigError(msg)
        return [str(v) for v in value]
    if key in _BOOL_KEYS:
        if not isinstance(value, bool):
            msg = f"{key} must be true or false, got {value!r}"
            raise ConfigError(msg)
        return value
    if key == "features" and isinstance(value, list):
        return " ".join(str(v) for v in value)
    return None if value is None else str(value)


def resolve_config(overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled. Unknown keys are ignored; None values keep the default."""
    out = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_CONFIG.items()}
    if not overrides:
        return out
    for k, v in overrides.items():
        if k not in out:
            log.debug("Ignoring unknown config key %r", k)
            continue
        if v is None:
            continue
        out[k] = _coerce(k, v)
    return out


def load_config_file(path: Path | None, cwd: Path | None = None) -> dict[str, Any]:
    """Read YAML config from path, or ./cargo-lipo.yaml when path is None and the file exists. {} if none."""
    if path is None:
        candidate = (cwd or Path.cwd()) / CONFIG_FILE_NAME
        if not candidate.is_file():
            return {}
        path = candidate
    try:
        data = load_yaml_mapping(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        msg = f"Could not read config {path}: {e}"
        raise ConfigError(msg) from e
    log.debug("Loaded config from %s", path)
    return data


def build_config(
    cli_overrides: dict[str, Any], config_path: Path | None = None, cwd: Path | None = None
) -> dict[str, Any]:
    """defaults < config file < command-line flags (flags left at None do not override)."""
    merged = dict(load_config_file(config_path, cwd))
    merged.update({k: v for k, v in cli_overrides.items() if v is not None})
    return resolve_config(merged)
