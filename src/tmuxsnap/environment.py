"""Capture the invoking process's context once, at start-up."""

from __future__ import annotations

import dataclasses
import logging
import os
import pathlib
import typing as t

if t.TYPE_CHECKING:
    from collections.abc import Mapping
    from os import PathLike

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Environment:
    """Context the materializer needs about the process that invoked it.

    Attributes
    ----------
    inside_tmux : bool
        True when running inside a tmux client (``$TMUX`` is set), in which
        case the new session is switched to instead of attached.
    full_path : str
        Absolute current working directory.
    working_directory : str
        Last component of :attr:`full_path`.
    """

    inside_tmux: bool
    full_path: str = ""
    working_directory: str = ""

    @classmethod
    def from_os(
        cls,
        environ: Mapping[str, str] | None = None,
        cwd: str | PathLike[str] | None = None,
    ) -> Environment:
        """Read the environment of the current process.

        Examples
        --------
        >>> env = Environment.from_os(environ={"TMUX": "/tmp/tmux-1000/default"},
        ...                           cwd="/home/user/project")
        >>> env.inside_tmux, env.working_directory
        (True, 'project')
        """
        if environ is None:
            environ = os.environ
        path = pathlib.Path(cwd) if cwd is not None else pathlib.Path.cwd()

        env = cls(
            inside_tmux="TMUX" in environ,
            full_path=str(path),
            working_directory=path.name,
        )
        logger.debug("captured %r", env)
        return env
