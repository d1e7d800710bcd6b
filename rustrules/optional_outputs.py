"""Run a program and make sure its optional outputs exist afterwards."""

from __future__ import annotations

import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

_USAGE = "Usage: [optional_output1...optional_outputN] -- program [arg1...argn]"


def split_args(argv: Sequence[str]) -> tuple[list[str], str, list[str]]:
    """Split ``outputs... -- program args...`` into its three parts."""
    argv = list(argv)
    try:
        index = argv.index("--")
    except ValueError:
        raise ValueError("no --") from None
    outputs = argv[:index]
    if index + 1 >= len(argv):
        raise ValueError("no exe")
    exe = argv[index + 1]
    exe_args = argv[index + 2:]
    if not exe_args:
        raise ValueError("no exe args")
    return outputs, exe, exe_args


def ensure(argv: Sequence[str]) -> int:
    """Run the program; on success create any missing optional output.

    Returns the program's exit status. Raises RuntimeError if the program
    was killed by a signal.
    """
    outputs, exe, exe_args = split_args(argv)
    code = subprocess.run([exe, *exe_args], check=False).returncode
    if code < 0:
        raise RuntimeError("process killed")
    if code == 0:
        for output in outputs:
            path = Path(output)
            if not path.exists():
                path.touch()
    return code


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point; returns the program's status, or -1 on misuse."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        return ensure(argv)
    except (ValueError, RuntimeError, OSError) as err:
        print(_USAGE)
        print(list(argv))
        print(repr(err))
        return -1


if __name__ == "__main__":
    sys.exit(main())