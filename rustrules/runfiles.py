"""Lookup of runfiles for Bazel-built binaries and tests."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

_RUNFILES_SUFFIX = ".runfiles"


def find_runfiles_dir(argv0: str | os.PathLike[str] | None = None) -> Path:
    """Return the .runfiles directory for the binary at ``argv0``.

    ``argv0`` defaults to the path of the running program. Symlinks are
    followed while searching. Raises OSError if no directory is found.
    """
    if argv0 is None:
        argv0 = sys.argv[0]
    binary_path = Path(argv0)
    while True:
        # A neighbouring "<binary>.runfiles" directory.
        runfiles_path = binary_path.with_name(binary_path.name + _RUNFILES_SUFFIX)
        if runfiles_path.is_dir():
            return runfiles_path

        # Already somewhere beneath a "*.runfiles" directory.
        for ancestor in binary_path.parents:
            if ancestor.name.endswith(_RUNFILES_SUFFIX):
                return ancestor

        if not stat.S_ISLNK(os.lstat(binary_path).st_mode):
            break
        link_target = Path(os.readlink(binary_path))
        if link_target.is_absolute():
            binary_path = link_target
        else:
            binary_path = Path.cwd() / binary_path.parent / link_target

    raise OSError("Failed to find .runfiles directory.")


@dataclass(frozen=True)
class Runfiles:
    """A directory-based runfiles tree."""

    runfiles_dir: Path

    @classmethod
    def create(cls, argv0: str | os.PathLike[str] | None = None) -> Runfiles:
        """Locate the runfiles directory of the binary at ``argv0``."""
        return cls(find_runfiles_dir(argv0))

    def rlocation(self, path: str | os.PathLike[str]) -> Path:
        """Return the runtime path of a runfile; it may not exist."""
        path = Path(path)
        if path.is_absolute():
            return path
        return self.runfiles_dir / path