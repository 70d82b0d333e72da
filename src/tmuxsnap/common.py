"""Run tmux commands for tmuxsnap.

tmuxsnap.common
~~~~~~~~~~~~~~~

tmux is driven in two shapes: *queries* capture standard output as a list of
lines (``list-sessions``, ``list-windows``, ``list-panes``) and *commands*
mutate server state and inherit the caller's terminal (``new-session``,
``split-window``, ``attach``). Both block until tmux exits.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import typing as t

from . import exc

logger = logging.getLogger(__name__)


class CommandRunner(t.Protocol):
    """Protocol for objects that can drive a tmux server.

    :class:`SubprocessRunner` is the real implementation; tests substitute a
    recording fake.
    """

    def run(self, *args: str | int) -> None:
        """Run a state-changing tmux command, raising on failure."""
        ...

    def query(self, *args: str | int) -> list[str]:
        """Run an informational tmux command and return its output lines."""
        ...


def get_tmux_bin(tmux_bin: str | None = None) -> str:
    """Return the path to the tmux executable.

    Raises
    ------
    :exc:`exc.TmuxCommandNotFound`
        If tmux cannot be located.
    """
    found = shutil.which(tmux_bin or "tmux")
    if not found:
        raise exc.TmuxCommandNotFound
    return found


class tmux_cmd:
    """Run any :term:`tmux(1)` command through :py:mod:`subprocess`, capturing output.

    Examples
    --------
    >>> proc = tmux_cmd('-V')
    >>> proc.returncode
    0

    Attributes
    ----------
    cmd : list[str]
        Full argument vector, binary included.
    stdout : list[str]
        Standard output split into lines, trailing blank lines removed.
    stderr : list[str]
        Non-empty standard error lines.
    returncode : int
        Exit status of tmux.
    """

    def __init__(self, *args: str | int, tmux_bin: str | None = None) -> None:
        cmd = [get_tmux_bin(tmux_bin)]
        cmd += [str(c) for c in args]

        self.cmd = cmd

        try:
            self.process = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
            raw_stdout, raw_stderr = self.process.communicate()
            returncode = self.process.returncode
        except OSError as e:
            logger.exception("Exception for %s", subprocess.list2cmdline(cmd))
            raise exc.ExternalProcessError(cmd, reason=str(e)) from e

        self.returncode = returncode

        # stderr is only reported, stdout is parsed and replayed
        stderr = raw_stderr.decode("utf-8", errors="backslashreplace")
        try:
            stdout = raw_stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise exc.ExternalProcessError(
                cmd,
                returncode,
                [line for line in stderr.split("\n") if line],
                reason="non-UTF-8 output",
            ) from e

        stdout_split = stdout.split("\n")
        # remove trailing newlines from stdout
        while stdout_split and stdout_split[-1] == "":
            stdout_split.pop()
        self.stdout = stdout_split

        self.stderr = [line for line in stderr.split("\n") if line]

        logger.debug("self.stdout for %s: %s", " ".join(cmd), self.stdout)


class SubprocessRunner:
    """Drive a tmux server by spawning the tmux binary for every call.

    Parameters
    ----------
    socket_name : str, optional
        Passed as ``-L`` to select a named server socket.
    socket_path : str, optional
        Passed as ``-S`` to select a server socket by path.
    config_file : str, optional
        Passed as ``-f`` when the server has to be started.
    tmux_bin : str, optional
        Name or path of the tmux executable, ``tmux`` by default.
    """

    def __init__(
        self,
        socket_name: str | None = None,
        socket_path: str | None = None,
        config_file: str | None = None,
        tmux_bin: str | None = None,
    ) -> None:
        self.socket_name = socket_name
        self.socket_path = socket_path
        self.config_file = config_file
        self.tmux_bin = tmux_bin

    def __repr__(self) -> str:
        """Representation of :class:`SubprocessRunner`."""
        if self.socket_name is not None:
            return f"{self.__class__.__name__}(socket_name={self.socket_name})"
        if self.socket_path is not None:
            return f"{self.__class__.__name__}(socket_path={self.socket_path})"
        return f"{self.__class__.__name__}()"

    def _global_args(self) -> list[str]:
        svr_args: list[str] = []
        if self.socket_name:
            svr_args.insert(0, f"-L{self.socket_name}")
        if self.socket_path:
            svr_args.insert(0, f"-S{self.socket_path}")
        if self.config_file:
            svr_args.insert(0, f"-f{self.config_file}")
        return svr_args

    def query(self, *args: str | int) -> list[str]:
        """Return the output lines of ``$ tmux <args>``.

        Raises
        ------
        :exc:`exc.ExternalProcessError`
            If tmux cannot be launched, exits non-zero, or prints output that
            is not UTF-8.
        """
        proc = tmux_cmd(*self._global_args(), *args, tmux_bin=self.tmux_bin)
        if proc.returncode != 0:
            raise exc.ExternalProcessError(proc.cmd, proc.returncode, proc.stderr)
        return proc.stdout

    def run(self, *args: str | int) -> None:
        """Run ``$ tmux <args>`` attached to the invoking terminal.

        Standard streams are inherited so that ``attach`` can take over the
        terminal. Returns once tmux exits.

        Raises
        ------
        :exc:`exc.ExternalProcessError`
            If tmux cannot be launched or exits non-zero.
        """
        cmd = [get_tmux_bin(self.tmux_bin), *self._global_args()]
        cmd += [str(c) for c in args]

        logger.debug("running %s", subprocess.list2cmdline(cmd))
        try:
            returncode = subprocess.Popen(cmd).wait()
        except OSError as e:
            logger.exception("Exception for %s", subprocess.list2cmdline(cmd))
            raise exc.ExternalProcessError(cmd, reason=str(e)) from e

        if returncode != 0:
            raise exc.ExternalProcessError(cmd, returncode)
