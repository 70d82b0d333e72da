"""Provide exceptions used by tmuxsnap.

tmuxsnap.exc
~~~~~~~~~~~~

Every error raised by tmuxsnap inherits from :exc:`TmuxSnapException`, so the
command line can report any failure with a single ``except`` clause.

Notes
-----
Only :exc:`ParseError` raised while reading windows or panes is ever
recovered from: the parent record keeps ``None`` for that child collection.
"""

from __future__ import annotations

import typing as t

if t.TYPE_CHECKING:
    from collections.abc import Sequence


class TmuxSnapException(Exception):
    """Base exception for all tmuxsnap errors."""


class SessionNotFound(TmuxSnapException, LookupError):
    """Raised if the requested session is not among the live tmux sessions."""

    def __init__(
        self,
        session_name: str,
        available: Sequence[str] = (),
        *args: object,
    ) -> None:
        self.session_name = session_name
        self.available = list(available)
        found = ", ".join(self.available) if self.available else "none"
        super().__init__(
            f"Could not find session {session_name!r} (available: {found})",
        )


class ParseError(TmuxSnapException, ValueError):
    """Raised if a tmux listing line does not have the expected shape."""

    def __init__(
        self,
        field: str,
        line: str | None = None,
        reason: str | None = None,
        *args: object,
    ) -> None:
        self.field = field
        self.line = line
        msg = f"Could not parse {field}"
        if reason is not None:
            msg += f": {reason}"
        if line is not None:
            msg += f" (line: {line!r})"
        super().__init__(msg)


class DecodeError(TmuxSnapException, ValueError):
    """Raised if a persisted snapshot does not decode into a session."""

    def __init__(self, field: str, reason: str, *args: object) -> None:
        self.field = field
        super().__init__(f"Invalid snapshot field {field!r}: {reason}")


class ExternalProcessError(TmuxSnapException):
    """Raised if tmux fails to launch or exits with a non-zero status."""

    def __init__(
        self,
        cmd: Sequence[str] | None = None,
        returncode: int | None = None,
        stderr: Sequence[str] = (),
        reason: str | None = None,
        *args: object,
    ) -> None:
        self.cmd = list(cmd) if cmd is not None else []
        self.returncode = returncode
        self.stderr = list(stderr)
        msg = f"Command failed: {' '.join(self.cmd)}"
        if returncode is not None:
            msg += f" (exit status {returncode})"
        if reason is not None:
            msg += f": {reason}"
        if self.stderr:
            msg += f": {' '.join(self.stderr)}"
        super().__init__(msg)


class TmuxCommandNotFound(ExternalProcessError):
    """Raised when the tmux binary cannot be found on the system."""

    def __init__(self, *args: object) -> None:
        super().__init__(["tmux"], reason="executable not found in PATH")


class StructuralError(TmuxSnapException):
    """Raised if a snapshot cannot be materialized as recorded."""
