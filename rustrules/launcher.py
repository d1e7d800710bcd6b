"""Launch a test executable with environment variables read from a side file."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

LAUNCHFILES_ENV_PATH = ".launchfiles/env"
"""Suffix appended to the launcher's own path to find its environment file."""

_LAUNCHER_MARKER = ".launcher"
_PWD_PLACEHOLDER = "${pwd}"


def _lines(path: str | os.PathLike[str]):
    with open(path, encoding="utf-8", newline="") as handle:
        for line in handle:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def load_environ(
    env_path: str | os.PathLike[str], pwd: str | os.PathLike[str] | None = None
) -> dict[str, str]:
    """Read alternating key and value lines into a sorted mapping.

    Every ``${pwd}`` in a value is replaced with ``pwd``, which defaults to
    the current working directory. A trailing key without a value is ignored.
    """
    pwd_str = os.fspath(pwd) if pwd is not None else os.getcwd()
    environ: dict[str, str] = {}
    key: str | None = None
    for line in _lines(env_path):
        if key is None:
            key = line
            continue
        environ[key] = line.replace(_PWD_PLACEHOLDER, pwd_str)
        key = None
    return dict(sorted(environ.items()))


def executable_path(argv0: str) -> Path:
    """Return the launched executable: ``argv0`` with its last ``.launcher`` removed."""
    stem_index = argv0.rfind(_LAUNCHER_MARKER)
    if stem_index < 0:
        raise ValueError(f"This executable should always contain `{_LAUNCHER_MARKER}`")
    return Path(argv0[:stem_index] + argv0[stem_index + len(_LAUNCHER_MARKER):])


def main(argv: Sequence[str] | None = None) -> int:
    """Run the executable next to this launcher.

    ``argv`` is the full argument vector, the launcher's own path first.
    On POSIX systems the current process is replaced; elsewhere the
    executable runs as a child and its exit status is returned.
    """
    if argv is None:
        argv = sys.argv
    if not argv:
        raise ValueError("arg 0 was not set")
    argv0, args = argv[0], list(argv[1:])

    launch_environ = load_environ(argv0 + LAUNCHFILES_ENV_PATH)
    executable = executable_path(argv0)
    environ = {**os.environ, **launch_environ}

    if os.name == "nt":
        result = subprocess.run([str(executable), *args], env=environ, check=False)
        return result.returncode if result.returncode is not None else 1

    try:
        os.execve(executable, [str(executable), *args], environ)
    except OSError as err:
        raise RuntimeError(
            f"Process failed to start: {executable} with {err}"
        ) from err
    raise RuntimeError("Process did not exit")


if __name__ == "__main__":
    sys.exit(main())