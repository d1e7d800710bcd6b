import subprocess
import sys
from unittest import mock

import pytest

from rustrules import optional_outputs
from rustrules.optional_outputs import ensure, split_args


def test_split_args():
    assert split_args(["a", "b", "--", "prog", "x", "y"]) == (
        ["a", "b"],
        "prog",
        ["x", "y"],
    )


def test_split_args_without_outputs():
    assert split_args(["--", "prog", "x"]) == ([], "prog", ["x"])


@pytest.mark.parametrize(
    "argv, message",
    [
        (["a", "prog", "x"], "no --"),
        (["a", "--"], "no exe"),
        (["a", "--", "prog"], "no exe args"),
    ],
)
def test_split_args_errors(argv, message):
    with pytest.raises(ValueError, match=f"^{message}$"):
        split_args(argv)


def test_ensure_creates_missing_outputs(tmp_path):
    first, second = tmp_path / "one.rs", tmp_path / "two.rs"
    code = ensure([str(first), str(second), "--", sys.executable, "-c", "pass"])
    assert code == 0
    assert first.exists() and second.exists()
    assert first.read_bytes() == b""


def test_ensure_keeps_existing_outputs(tmp_path):
    existing = tmp_path / "kept.rs"
    existing.write_text("content")
    assert ensure([str(existing), "--", sys.executable, "-c", "pass"]) == 0
    assert existing.read_text() == "content"


def test_ensure_failure_creates_nothing(tmp_path):
    output = tmp_path / "out.rs"
    code = ensure(
        [str(output), "--", sys.executable, "-c", "import sys; sys.exit(3)"]
    )
    assert code == 3
    assert not output.exists()


def test_ensure_killed_process(tmp_path):
    with mock.patch.object(optional_outputs.subprocess, "run") as run:
        run.return_value = subprocess.CompletedProcess([], -9)
        with pytest.raises(RuntimeError, match="process killed"):
            ensure([str(tmp_path / "out"), "--", "prog", "arg"])
    assert not (tmp_path / "out").exists()


def test_main_reports_usage_on_error(capsys):
    assert optional_outputs.main(["out", "prog"]) == -1
    printed = capsys.readouterr().out
    assert printed.startswith("Usage:")
    assert "no --" in printed


def test_main_returns_program_status(tmp_path):
    output = tmp_path / "out"
    status = optional_outputs.main(
        [str(output), "--", sys.executable, "-c", "import sys; sys.exit(0)"]
    )
    assert status == 0
    assert output.exists()