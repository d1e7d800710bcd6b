"""Format the Rust sources of Bazel targets with rustfmt."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from rustrules.label import LabelError, analyze
from rustrules.rustfmt_lib import (
    RUSTFMT_MANIFEST_EXTENSION,
    RustfmtConfig,
    parse_rustfmt_config,
    parse_rustfmt_manifest,
)

_RULE_KINDS = "^rust_"


@dataclass
class Config:
    """Settings for a formatting run."""

    workspace: Path
    bazel: Path
    rustfmt_config: RustfmtConfig
    packages: list[str] = field(default_factory=list)


def _exit_on_failure(result: subprocess.CompletedProcess) -> None:
    code = result.returncode
    if code != 0:
        raise SystemExit(code if code > 0 else 1)


def parse_args(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> Config:
    """Build a Config from the arguments (targets or packages) and environment."""
    if argv is None:
        argv = sys.argv[1:]
    if environ is None:
        environ = os.environ
    try:
        workspace = environ["BUILD_WORKSPACE_DIRECTORY"]
    except KeyError as err:
        raise KeyError(
            "The environment variable BUILD_WORKSPACE_DIRECTORY is required "
            "for finding the workspace root"
        ) from err
    return Config(
        workspace=Path(workspace),
        bazel=Path(environ.get("BAZEL_REAL", "bazel")),
        rustfmt_config=parse_rustfmt_config(environ),
        packages=list(argv),
    )


def _is_target(package: str) -> bool:
    try:
        return analyze(package).name != "all"
    except LabelError:
        return False


def query_scope(packages: Sequence[str]) -> str | None:
    """Return the query scope for ``packages``.

    Returns None when every entry is already a concrete target, in which
    case no query is needed.
    """
    if not packages:
        return "//...:all"
    if all(_is_target(package) for package in packages):
        return None
    return " + ".join(packages)


def query_rustfmt_targets(options: Config) -> list[str]:
    """Return the Bazel targets whose sources are to be formatted."""
    scope = query_scope(options.packages)
    if scope is None:
        return list(options.packages)

    kinds = f"kind('{_RULE_KINDS}', {scope})"
    query = f"{kinds} except attr(tags, 'norustfmt', {kinds})"
    result = subprocess.run(
        [str(options.bazel), "query", query],
        cwd=options.workspace,
        stdout=subprocess.PIPE,
        check=False,
    )
    _exit_on_failure(result)
    output = result.stdout.decode("utf-8")
    return [line for line in output.split("\n") if line]


def generate_rustfmt_target_manifests(options: Config, targets: Sequence[str]) -> None:
    """Build ``targets`` with the rustfmt aspect to write their manifests."""
    result = subprocess.run(
        [
            str(options.bazel),
            "build",
            "--aspects=@rules_rust//rust:defs.bzl%rustfmt_aspect",
            "--output_groups=rustfmt_manifest",
            *targets,
        ],
        cwd=options.workspace,
        stdout=subprocess.PIPE,
        check=False,
    )
    _exit_on_failure(result)


def manifest_path(workspace: str | os.PathLike[str], target: str) -> Path:
    """Return where the rustfmt manifest of ``target`` is written."""
    target_path = target.replace(":", "/").lstrip("/")
    return Path(workspace) / "bazel-bin" / f"{target_path}.{RUSTFMT_MANIFEST_EXTENSION}"


def apply_rustfmt(options: Config, targets: Sequence[str]) -> None:
    """Run rustfmt over the sources of every target that has a manifest."""
    generate_rustfmt_target_manifests(options, targets)

    for target in targets:
        manifest = manifest_path(options.workspace, target)
        if not manifest.exists():
            continue
        rustfmt_manifest = parse_rustfmt_manifest(manifest)
        # Targets whose sources are all generated have nothing to format.
        if not rustfmt_manifest.sources:
            continue
        result = subprocess.run(
            [
                str(options.rustfmt_config.rustfmt),
                "--edition",
                rustfmt_manifest.edition,
                "--config-path",
                str(options.rustfmt_config.config),
                *rustfmt_manifest.sources,
            ],
            cwd=options.workspace,
            check=False,
        )
        _exit_on_failure(result)


def main(argv: Sequence[str] | None = None) -> int:
    """Format the requested targets, or the whole workspace."""
    options = parse_args(argv)
    targets = query_rustfmt_targets(options)
    apply_rustfmt(options, targets)
    return 0


if __name__ == "__main__":
    sys.exit(main())