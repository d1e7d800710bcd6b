import os
from pathlib import Path
from unittest import mock

import pytest

from rustrules import launcher
from rustrules.launcher import LAUNCHFILES_ENV_PATH, executable_path, load_environ


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def test_load_environ_reads_pairs(tmp_path):
    env = _write(tmp_path / "env", "FOO\nBAR\nALPHA\nBETA\n")
    assert load_environ(env, "/work") == {"ALPHA": "BETA", "FOO": "BAR"}


def test_load_environ_is_sorted_by_key(tmp_path):
    env = _write(tmp_path / "env", "ZED\n1\nAAA\n2\nMID\n3\n")
    assert list(load_environ(env, "/work")) == sorted(["ZED", "AAA", "MID"])


def test_load_environ_replaces_pwd(tmp_path):
    env = _write(tmp_path / "env", "DATA\n${pwd}/data/${pwd}\n")
    assert load_environ(env, "/work") == {"DATA": "/work/data//work"}


def test_load_environ_defaults_pwd_to_cwd(tmp_path, monkeypatch):
    env = _write(tmp_path / "env", "HERE\n${pwd}\n")
    monkeypatch.chdir(tmp_path)
    assert load_environ(env) == {"HERE": os.getcwd()}


def test_load_environ_ignores_dangling_key(tmp_path):
    env = _write(tmp_path / "env", "KEY\nVALUE\nORPHAN\n")
    assert load_environ(env, "/work") == {"KEY": "VALUE"}


def test_load_environ_handles_crlf(tmp_path):
    env = _write(tmp_path / "env", "KEY\r\nVALUE\r\n")
    assert load_environ(env, "/work") == {"KEY": "VALUE"}


def test_load_environ_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_environ(tmp_path / "absent", "/work")


def test_executable_path_strips_marker():
    assert executable_path("/bin/my_test.launcher") == Path("/bin/my_test")


def test_executable_path_strips_last_marker_only():
    assert executable_path("/a.launcher/b.launcher") == Path("/a.launcher/b")


def test_executable_path_requires_marker():
    with pytest.raises(ValueError):
        executable_path("/bin/my_test")


def test_main_execs_target_with_environment(tmp_path):
    argv0 = str(tmp_path / "my_test.launcher")
    _write(Path(argv0 + LAUNCHFILES_ENV_PATH), "GREETING\nhello\n")
    with mock.patch.object(launcher.os, "name", "posix"), mock.patch.object(
        launcher.os, "execve"
    ) as execve:
        execve.side_effect = OSError("blocked")
        with pytest.raises(RuntimeError):
            launcher.main([argv0, "--flag", "value"])
    path, args, environ = execve.call_args.args
    assert Path(path) == tmp_path / "my_test"
    assert args[1:] == ["--flag", "value"]
    assert environ["GREETING"] == "hello"