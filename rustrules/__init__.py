"""Helpers for building Rust code with Bazel: labels, runfiles, rustfmt, rust-analyzer and launch tools."""

__version__ = "0.1.0"