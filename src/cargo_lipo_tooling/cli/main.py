"""`cargo-lipo` / `cargo lipo` entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from cargo_lipo_tooling import __version__
from cargo_lipo_tooling.config import build_config
from cargo_lipo_tooling.errors import LipoError
from cargo_lipo_tooling.invocation import Invocation
from cargo_lipo_tooling.pipeline import run


def _split_targets(values: list[str] | None) -> list[str] | None:
    if not values:
        return None
    return [t.strip() for v in values for t in v.split(",") if t.strip()]


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="cargo-lipo",
        description="Build a Rust staticlib/bin per Apple target and merge them with lipo",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument(
        "--targets",
        action="append",
        metavar="TRIPLE[,TRIPLE...]",
        help="Targets to build (default: aarch64-apple-ios,x86_64-apple-ios)",
    )
    ap.add_argument("--release", action="store_true", default=None, help="Release build")
    ap.add_argument(
        "--all",
        action="store_true",
        default=None,
        help="Build every workspace member that has a staticlib target",
    )
    ap.add_argument(
        "-p",
        "--package",
        dest="packages",
        action="append",
        metavar="NAME",
        help="Package to build (repeatable)",
    )
    ap.add_argument(
        "--allow-bin", action="store_true", default=None, help="Also accept bin targets"
    )
    ap.add_argument("--features", help="Space or comma separated features to activate")
    ap.add_argument("--all-features", action="store_true", default=None)
    ap.add_argument("--no-default-features", action="store_true", default=None)
    ap.add_argument("--manifest-path", type=Path, help="Path to Cargo.toml")
    ap.add_argument(
        "--xcode-integ",
        action="store_true",
        default=None,
        help="Take targets and output path from the Xcode build environment",
    )
    ap.add_argument(
        "--no-sanitize-env",
        dest="sanitize_env",
        action="store_false",
        default=None,
        help="Pass the Xcode environment through to cargo unchanged",
    )
    ap.add_argument("--allow-run-on-non-macos", action="store_true", default=None)
    ap.add_argument("--color", choices=("auto", "always", "never"))
    ap.add_argument("--config", type=Path, help="YAML config (default: ./cargo-lipo.yaml if present)")
    ap.add_argument("-v", "--verbose", action="count", default=0)
    return ap


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_argv(argv: list[str] | None = None) -> int:
    """Parse argv and run. Returns 0 or 1."""
    if argv is None:
        argv = sys.argv[1:]
    if argv and argv[0] == "lipo":  # invoked as `cargo lipo`
        argv = argv[1:]
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    overrides = {
        "targets": _split_targets(args.targets),
        "release": args.release,
        "all": args.all,
        "packages": args.packages,
        "allow_bin": args.allow_bin,
        "features": args.features,
        "all_features": args.all_features,
        "no_default_features": args.no_default_features,
        "manifest_path": str(args.manifest_path) if args.manifest_path else None,
        "xcode_integ": args.xcode_integ,
        "sanitize_env": args.sanitize_env,
        "allow_run_on_non_macos": args.allow_run_on_non_macos,
    }
    try:
        cfg = build_config(overrides, args.config)
        invocation = Invocation.from_config(cfg, color=args.color, verbose=args.verbose)
        outputs = run(invocation)
    except LipoError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    for p in outputs:
        print(f"📦 {p}")
    return 0


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run_argv())


if __name__ == "__main__":
    main()
