"""Generate rust-project.json for rust-analyzer in a Bazel workspace."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from rustrules.label import LabelError, analyze

_EXEC_ROOT_PLACEHOLDER = "__EXEC_ROOT__"


@dataclass
class Config:
    """Settings for generating rust-project.json."""

    workspace: Path | None = None
    execution_root: Path | None = None
    bazel: Path = Path("bazel")
    bazel_analyzer_target: str = "//:rust_analyzer"


def _argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rust_analyzer")
    parser.add_argument("--workspace", type=Path, default=None)
    parser.add_argument("--execution-root", type=Path, default=None)
    parser.add_argument("--bazel", type=Path, default=Path("bazel"))
    parser.add_argument("--bazel-analyzer-target", default="//:rust_analyzer")
    return parser


def parse_bazel_info(output: str) -> dict[str, str]:
    """Parse ``key: value`` lines as printed by ``bazel info``."""
    info = {}
    for line in output.strip().split("\n"):
        key, colon, value = line.partition(":")
        if not colon:
            raise ValueError("missing `:` in bazel info output")
        info[key] = value.strip()
    return info


def parse_config(
    argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None
) -> Config:
    """Parse the flags, filling in missing roots from ``bazel info``."""
    if environ is None:
        environ = os.environ
    args = _argument_parser().parse_args(argv)
    config = Config(
        workspace=args.workspace,
        execution_root=args.execution_root,
        bazel=args.bazel,
        bazel_analyzer_target=args.bazel_analyzer_target,
    )

    # Under `bazel run` the workspace directory is given in the environment.
    if config.workspace is None and "BUILD_WORKSPACE_DIRECTORY" in environ:
        config.workspace = Path(environ["BUILD_WORKSPACE_DIRECTORY"])

    if config.workspace is not None and config.execution_root is not None:
        return config

    result = subprocess.run(
        [str(config.bazel), "info"],
        cwd=config.workspace,
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise RuntimeError(
            f"Failed to run `bazel info` (exit status {result.returncode}): {stderr}"
        )

    info = parse_bazel_info(result.stdout.decode("utf-8", errors="replace"))
    if config.workspace is None and "workspace" in info:
        config.workspace = Path(info["workspace"])
    if config.execution_root is None and "execution_root" in info:
        config.execution_root = Path(info["execution_root"])
    return config


def _require_roots(config: Config) -> tuple[Path, Path]:
    if config.workspace is None:
        raise ValueError("failed to find workspace root, set with --workspace")
    if config.execution_root is None:
        raise ValueError("failed to find execution root, is --workspace set correctly?")
    return config.workspace, config.execution_root


def build_rust_project_target(config: Config) -> None:
    """Build the analyzer target that writes the generated rust-project.json."""
    result = subprocess.run(
        [str(config.bazel), "build", config.bazel_analyzer_target],
        cwd=config.workspace,
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise RuntimeError(
            f"bazel build failed:(exit status {result.returncode}) of "
            f"{config.bazel_analyzer_target!r}:\n{stderr}"
        )


def write_rust_project(config: Config) -> Path:
    """Copy the generated rust-project.json into the workspace root.

    The execution root placeholder is substituted on the way. Returns the
    path written.
    """
    workspace, execution_root = _require_roots(config)
    try:
        label = analyze(config.bazel_analyzer_target)
    except LabelError as err:
        raise ValueError(f"Cannot parse --bazel-analyzer-target: {err}") from err

    generated = workspace.joinpath("bazel-bin", *label.packages(), "rust-project.json")
    generated_json = generated.read_text(encoding="utf-8")

    destination = workspace / "rust-project.json"
    destination.unlink(missing_ok=True)
    destination.write_text(
        generated_json.replace(_EXEC_ROOT_PLACEHOLDER, str(execution_root)),
        encoding="utf-8",
    )
    return destination


def main(argv: Sequence[str] | None = None) -> int:
    """Build the analyzer target and install its rust-project.json."""
    config = parse_config(argv)
    _require_roots(config)
    build_rust_project_target(config)
    write_rust_project(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())