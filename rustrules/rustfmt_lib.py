"""Configuration and manifest handling for running rustfmt over Bazel targets."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

RUSTFMT_MANIFEST_EXTENSION = "rustfmt"
"""The extension of the manifest files written by the rustfmt aspect."""

_EDITION_PATTERN = re.compile(r"[+-]?[0-9]+")


def _absolutify_existing(path: str | os.PathLike[str], what: str) -> Path:
    """Make ``path`` absolute without resolving symlinks; it must exist."""
    path = Path(path)
    absolute_path = path if path.is_absolute() else Path.cwd() / path
    try:
        os.stat(absolute_path)
    except FileNotFoundError as err:
        raise FileNotFoundError(f"Unable to find {what}: {absolute_path}") from err
    return absolute_path


@dataclass(frozen=True)
class RustfmtConfig:
    """The rustfmt binary to run and the rustfmt settings file it uses."""

    rustfmt: Path
    config: Path


@dataclass(frozen=True)
class RustfmtManifest:
    """Target-specific information for running rustfmt."""

    edition: str
    sources: list[str] = field(default_factory=list)


def parse_rustfmt_config(environ: Mapping[str, str] | None = None) -> RustfmtConfig:
    """Build a RustfmtConfig from the RUSTFMT and RUSTFMT_CONFIG variables."""
    if environ is None:
        environ = os.environ
    try:
        rustfmt = environ["RUSTFMT"]
        config = environ["RUSTFMT_CONFIG"]
    except KeyError as err:
        raise KeyError(f"The environment variable {err.args[0]} is required") from err
    return RustfmtConfig(
        rustfmt=_absolutify_existing(rustfmt, "rustfmt binary"),
        config=_absolutify_existing(config, "rustfmt config file"),
    )


def parse_rustfmt_manifest(manifest: str | os.PathLike[str]) -> RustfmtManifest:
    """Read a manifest: source files, one per line, then the edition last."""
    try:
        content = Path(manifest).read_text(encoding="utf-8")
    except OSError as err:
        raise OSError(f"Failed to read rustfmt manifest: {manifest}") from err

    lines = [line for line in content.split("\n") if line]
    if not lines:
        raise ValueError("There should always be at least 1 line in the manifest")
    edition = lines.pop()
    if not _EDITION_PATTERN.fullmatch(edition):
        raise ValueError(
            f"The edition should be a numeric value. eg `2018`. Got {edition!r}"
        )
    return RustfmtManifest(edition=edition, sources=lines)