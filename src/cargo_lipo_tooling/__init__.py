"""Build Rust staticlib/bin targets per Apple architecture and merge them into universal artifacts with lipo."""

__version__ = "0.1.0"
