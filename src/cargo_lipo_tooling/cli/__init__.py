"""Command-line entry points for cargo-lipo."""
