"""Create a zip archive with a directory prefix stripped from each entry name."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

USAGE = """\
usage: dir_zipper <zipper> <output> <root-dir> [<file>...]

Creates a zip archive, stripping a directory prefix from each file name.

Args:
  zipper: Path to @bazel_tools//tools/zip:zipper.
  output: Path to zip file to create: e.g., "/tmp/out.zip".
  root_dir: Directory to strip from each archive name, with no trailing
    slash: e.g., "/tmp/myfiles".
  files: List of files to include in the archive, all under `root_dir`:
    e.g., ["/tmp/myfiles/a", "/tmp/myfiles/b/c"].

Example:
  dir_zipper \\
    bazel-rules_rust/external/bazel_tools/tools/zip/zipper/zipper \\
    /tmp/out.zip \\
    /tmp/myfiles \\
    /tmp/myfiles/a /tmp/myfiles/b/c

This will create /tmp/out.zip with file entries "a" and "b/c".
"""


def _relative_name(path: Path, root_dir: Path) -> str:
    try:
        relative = path.relative_to(root_dir)
    except ValueError as err:
        raise ValueError(f"fatal: non-descendant: {path} not under {root_dir}") from err
    return str(relative) if relative.parts else ""


def build_zipper_command(
    zipper: str | os.PathLike[str],
    output: str | os.PathLike[str],
    root_dir: str | os.PathLike[str],
    files: Iterable[str | os.PathLike[str]],
) -> list[str]:
    """Return the zipper invocation that stores ``files`` relative to ``root_dir``.

    Raises ValueError if a file does not lie under ``root_dir``.
    """
    root = Path(root_dir)
    command = [os.fspath(zipper), "c", os.fspath(output)]  # create, don't compress
    for file in files:
        path = Path(file)
        command.append(f"{_relative_name(path, root)}={path}")
    return command


def main(argv: Sequence[str] | None = None) -> int:
    """Run the zipper over the given files and return its exit status."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 3:
        print(USAGE, file=sys.stderr)
        return 1
    zipper, output, root_dir, *files = argv
    try:
        command = build_zipper_command(zipper, output, root_dir, files)
    except ValueError as err:
        print(err, file=sys.stderr)
        return 1

    try:
        result = subprocess.run(command, check=False)
    except OSError as err:
        print(f"fatal: could not spawn zipper: {err}", file=sys.stderr)
        return 1

    if result.returncode < 0:
        print("fatal: zipper terminated by signal", file=sys.stderr)
        return 1
    return result.returncode


if __name__ == "__main__":
    sys.exit(main())