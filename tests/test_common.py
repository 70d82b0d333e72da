"""Tests for tmuxsnap.common, using a stand-in tmux executable."""

from __future__ import annotations

import os
import stat
import typing as t

import pytest

from tmuxsnap import exc
from tmuxsnap.common import SubprocessRunner, get_tmux_bin, tmux_cmd

if t.TYPE_CHECKING:
    import pathlib

FAKE_TMUX = """\
#!/bin/sh
printf '%s\\n' "$@" > "$(dirname "$0")/argv"
case "$*" in
  *list-sessions*)
    printf 'work: 2 windows (created Mon Oct 19 10:00:00 2026)\\n\\n\\n'
    ;;
  *latin1*)
    printf '1: caf\\351* (1 panes) [80x24] [layout b25d,80x24,0,0,0] @1\\n'
    ;;
  *fail*)
    echo "no server running" >&2
    exit 1
    ;;
esac
exit 0
"""


@pytest.fixture
def fake_tmux(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Put a scripted ``tmux`` first on $PATH and return its directory."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "tmux"
    script.write_text(FAKE_TMUX)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return bin_dir


def recorded_argv(bin_dir: pathlib.Path) -> list[str]:
    return (bin_dir / "argv").read_text().splitlines()


def test_get_tmux_bin_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    """A missing tmux binary is reported as a process error."""
    monkeypatch.setenv("PATH", "")
    with pytest.raises(exc.TmuxCommandNotFound) as excinfo:
        get_tmux_bin()
    assert isinstance(excinfo.value, exc.ExternalProcessError)


def test_tmux_cmd_strips_trailing_blank_lines(fake_tmux: pathlib.Path) -> None:
    """stdout keeps content lines only."""
    proc = tmux_cmd("list-sessions")
    assert proc.returncode == 0
    assert proc.stdout == ["work: 2 windows (created Mon Oct 19 10:00:00 2026)"]
    assert proc.stderr == []
    assert proc.cmd[1:] == ["list-sessions"]


def test_query(fake_tmux: pathlib.Path) -> None:
    """query() returns the output lines."""
    runner = SubprocessRunner()
    assert runner.query("list-sessions") == [
        "work: 2 windows (created Mon Oct 19 10:00:00 2026)",
    ]


def test_query_failure(fake_tmux: pathlib.Path) -> None:
    """Non-zero exits raise with stderr attached."""
    runner = SubprocessRunner()
    with pytest.raises(exc.ExternalProcessError) as excinfo:
        runner.query("fail")
    assert excinfo.value.returncode == 1
    assert excinfo.value.stderr == ["no server running"]
    assert "no server running" in str(excinfo.value)


def test_run(fake_tmux: pathlib.Path) -> None:
    """run() passes arguments through, stringified."""
    SubprocessRunner().run("split-window", "-h", "-t", "work:1")
    assert recorded_argv(fake_tmux) == ["split-window", "-h", "-t", "work:1"]


def test_run_failure(fake_tmux: pathlib.Path) -> None:
    """run() raises on a non-zero exit."""
    with pytest.raises(exc.ExternalProcessError) as excinfo:
        SubprocessRunner().run("fail")
    assert excinfo.value.returncode == 1


def test_server_flags(fake_tmux: pathlib.Path) -> None:
    """Server selection flags precede the command."""
    runner = SubprocessRunner(socket_name="snap", config_file="/dev/null")
    runner.run("new-session", "-d", "-s", "work")
    assert recorded_argv(fake_tmux) == [
        "-f/dev/null",
        "-Lsnap",
        "new-session",
        "-d",
        "-s",
        "work",
    ]


def test_repr() -> None:
    """repr() shows the selected server."""
    assert repr(SubprocessRunner(socket_name="snap")) == "SubprocessRunner(socket_name=snap)"
    assert repr(SubprocessRunner()) == "SubprocessRunner()"


def test_query_rejects_non_utf8_output(fake_tmux: pathlib.Path) -> None:
    """Undecodable output fails instead of being rewritten into the snapshot."""
    with pytest.raises(exc.ExternalProcessError) as excinfo:
        SubprocessRunner().query("list-windows", "-t", "latin1")
    assert excinfo.value.returncode == 0
    assert "non-UTF-8 output" in str(excinfo.value)


def test_query_keeps_utf8_output(
    tmp_path: pathlib.Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Valid multi-byte names pass through unchanged."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "tmux"
    script.write_text("#!/bin/sh\nprintf '1: caf\\303\\251* (1 panes)\\n'\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    assert SubprocessRunner().query("list-windows") == ["1: café* (1 panes)"]
