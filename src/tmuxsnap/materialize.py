"""Rebuild a tmux session from a :class:`~tmuxsnap.models.Session` snapshot.

tmuxsnap.materialize
~~~~~~~~~~~~~~~~~~~~

tmux creates one window together with every session, under an index the
caller does not choose. The first recorded window therefore reuses that
window (it is renamed and split) while every other window is created with
``new-window``. Commands are issued strictly in order; later ones address
windows created by earlier ones.
"""

from __future__ import annotations

import logging
import typing as t

from . import exc
from .parser import split_listing

if t.TYPE_CHECKING:
    from .common import CommandRunner
    from .environment import Environment
    from .models import Session, Window

logger = logging.getLogger(__name__)


class SessionMaterializer:
    """Replay snapshots against a tmux server.

    Parameters
    ----------
    runner : :class:`~tmuxsnap.common.CommandRunner`
        Where commands are sent.
    environment : :class:`~tmuxsnap.environment.Environment`
        Decides between ``switch`` and ``attach`` once the session exists.
    """

    def __init__(self, runner: CommandRunner, environment: Environment) -> None:
        self.runner = runner
        self.environment = environment

    @staticmethod
    def check(session: Session) -> None:
        """Verify ``session`` can be replayed, before anything is sent to tmux.

        Raises
        ------
        :exc:`exc.StructuralError`
            If the session has no windows or a window has no panes.
        """
        if not session.windows:
            msg = f"Session {session.name!r} has no windows to create"
            raise exc.StructuralError(msg)
        for window in session.windows:
            if window.pane_count < 1:
                msg = (
                    f"Window {window.id} ({window.name!r}) of session "
                    f"{session.name!r} has pane_count {window.pane_count}"
                )
                raise exc.StructuralError(msg)

    def initial_window_index(self, session_name: str) -> str:
        """Return the index tmux gave the window created with the session."""
        lines = self.runner.query("list-windows", "-t", session_name)
        if not lines:
            msg = f"tmux reported no windows for new session {session_name!r}"
            raise exc.StructuralError(msg)
        index, _ = split_listing(lines[0])
        return index

    def split_panes(self, session_name: str, window: Window) -> None:
        """Split ``window`` until it has ``pane_count`` panes."""
        target = window.target(session_name)
        for _ in range(window.pane_count - 1):
            self.runner.run("split-window", "-h", "-t", target)

    def materialize(self, session: Session, attach: bool = True) -> None:
        """Create ``session`` on the tmux server and move the client to it.

        Parameters
        ----------
        session : :class:`~tmuxsnap.models.Session`
            Snapshot to replay. It is only read.
        attach : bool
            When False, the session is created but the client is neither
            attached nor switched.

        Raises
        ------
        :exc:`exc.StructuralError`
            Before any command, if the snapshot cannot be replayed.
        :exc:`exc.ExternalProcessError`
            If a tmux command fails. Commands already issued are not undone.
        """
        self.check(session)

        name = session.name
        first = session.first_window
        assert first is not None

        logger.debug("creating session %s", name)
        self.runner.run("new-session", "-d", "-s", name)

        initial = self.initial_window_index(name)
        logger.debug("renaming initial window %s:%s to %s", name, initial, first.name)
        self.runner.run("rename-window", "-t", f"{name}:{initial}", "--", first.name)
        self.split_panes(name, first)

        for window in session.remaining_windows:
            logger.debug("creating window %s in %s", window.name, name)
            self.runner.run("new-window", "-d", "-t", name, "-n", window.name)
            self.split_panes(name, window)
            if window.layout:
                self.runner.run(
                    "select-layout",
                    "-t",
                    window.target(name),
                    window.layout,
                )
            else:
                logger.debug("no layout recorded for %s", window.target(name))

        if not attach:
            return
        if self.environment.inside_tmux:
            self.runner.run("switch", "-t", name)
        else:
            self.runner.run("attach", "-t", name)


def materialize(
    session: Session,
    runner: CommandRunner,
    environment: Environment,
    attach: bool = True,
) -> None:
    """Rebuild ``session`` with a one-off :class:`SessionMaterializer`."""
    SessionMaterializer(runner, environment).materialize(session, attach=attach)
