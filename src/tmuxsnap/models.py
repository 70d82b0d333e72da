"""Immutable records describing the shape of a tmux session.

tmuxsnap.models
~~~~~~~~~~~~~~~

A :class:`Session` holds its windows in tmux's native order; that order is
the replay order. ``windows`` and ``panes`` are ``None`` when they could not
be read, which is distinct from an empty tuple.
"""

from __future__ import annotations

import dataclasses
import typing as t

from . import exc

if t.TYPE_CHECKING:
    import sys

    if sys.version_info >= (3, 11):
        from typing import Self
    else:
        from typing_extensions import Self

#: Largest value accepted for window counts, window indexes and pane indexes.
SMALL_UINT_MAX = 255

SessionDict = dict[str, t.Any]
WindowDict = dict[str, t.Any]
PaneDict = dict[str, t.Any]


def _require(data: t.Any, key: str, owner: str) -> t.Any:
    if not isinstance(data, dict):
        raise exc.DecodeError(owner, f"expected a mapping, got {type(data).__name__}")
    if key not in data:
        raise exc.DecodeError(f"{owner}.{key}", "missing")
    return data[key]


def _int_field(
    data: t.Any,
    key: str,
    owner: str,
    maximum: int | None = SMALL_UINT_MAX,
) -> int:
    value = _require(data, key, owner)
    # bool is an int subclass; "true" is not a window index
    if isinstance(value, bool) or not isinstance(value, int):
        raise exc.DecodeError(
            f"{owner}.{key}",
            f"expected an integer, got {type(value).__name__}",
        )
    if value < 0 or (maximum is not None and value > maximum):
        raise exc.DecodeError(f"{owner}.{key}", f"{value} is out of range")
    return value


def _str_field(data: t.Any, key: str, owner: str) -> str:
    value = _require(data, key, owner)
    if not isinstance(value, str):
        raise exc.DecodeError(
            f"{owner}.{key}",
            f"expected a string, got {type(value).__name__}",
        )
    return value


def _optional_list(data: t.Any, key: str, owner: str) -> list[t.Any] | None:
    value = _require(data, key, owner)
    if value is None:
        return None
    if not isinstance(value, list):
        raise exc.DecodeError(
            f"{owner}.{key}",
            f"expected a list or null, got {type(value).__name__}",
        )
    return value


@dataclasses.dataclass(frozen=True)
class Pane:
    """A pane within a window, addressed by its index."""

    id: int

    def to_dict(self) -> PaneDict:
        """Return the pane as plain data."""
        return {"id": self.id}

    @classmethod
    def from_dict(cls, data: t.Any) -> Self:
        """Build a pane from plain data.

        Raises
        ------
        :exc:`exc.DecodeError`
        """
        return cls(id=_int_field(data, "id", "pane"))


@dataclasses.dataclass(frozen=True)
class Window:
    """A window as recorded from ``list-windows``.

    Attributes
    ----------
    id : int
        tmux window index. Not guaranteed to start at 0 or be contiguous.
    name : str
        Window name with activity markers (``*``, ``-``) removed.
    layout : str
        tmux layout descriptor, replayed verbatim with ``select-layout``.
    pane_count : int
        Number of panes in the window.
    panes : tuple of :class:`Pane`, optional
        Panes in tmux order, or ``None`` if they could not be read.
    """

    id: int
    name: str
    layout: str
    pane_count: int
    panes: tuple[Pane, ...] | None = None

    def target(self, session_name: str) -> str:
        """Return the ``session:window`` target for this window.

        >>> Window(id=1, name="editor", layout="", pane_count=1).target("work")
        'work:1'
        """
        return f"{session_name}:{self.id}"

    def to_dict(self) -> WindowDict:
        """Return the window as plain data."""
        return {
            "id": self.id,
            "name": self.name,
            "layout": self.layout,
            "pane_count": self.pane_count,
            "panes": (
                [pane.to_dict() for pane in self.panes]
                if self.panes is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: t.Any) -> Self:
        """Build a window from plain data.

        Raises
        ------
        :exc:`exc.DecodeError`
        """
        panes = _optional_list(data, "panes", "window")
        return cls(
            id=_int_field(data, "id", "window"),
            name=_str_field(data, "name", "window"),
            layout=_str_field(data, "layout", "window"),
            pane_count=_int_field(data, "pane_count", "window", maximum=None),
            panes=(
                tuple(Pane.from_dict(pane) for pane in panes)
                if panes is not None
                else None
            ),
        )


@dataclasses.dataclass(frozen=True)
class Session:
    """A tmux session and its windows.

    Attributes
    ----------
    name : str
        Session name.
    window_count : int
        Number of windows tmux reported for the session.
    windows : tuple of :class:`Window`, optional
        Windows in tmux order, or ``None`` if they could not be read.
    """

    name: str
    window_count: int
    windows: tuple[Window, ...] | None = None

    @property
    def first_window(self) -> Window | None:
        """Window that replaces the one tmux creates with the session."""
        if not self.windows:
            return None
        return self.windows[0]

    @property
    def remaining_windows(self) -> tuple[Window, ...]:
        """Windows that have to be created explicitly, in order."""
        if not self.windows:
            return ()
        return self.windows[1:]

    def to_dict(self) -> SessionDict:
        """Return the session as plain data.

        >>> Session(name="work", window_count=0).to_dict()
        {'name': 'work', 'window_count': 0, 'windows': None}
        """
        return {
            "name": self.name,
            "window_count": self.window_count,
            "windows": (
                [window.to_dict() for window in self.windows]
                if self.windows is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: t.Any) -> Self:
        """Build a session from plain data.

        Raises
        ------
        :exc:`exc.DecodeError`
            If a required key is missing or holds the wrong type.
        """
        name = _str_field(data, "name", "session")
        if not name:
            raise exc.DecodeError("session.name", "empty")
        windows = _optional_list(data, "windows", "session")
        return cls(
            name=name,
            window_count=_int_field(data, "window_count", "session"),
            windows=(
                tuple(Window.from_dict(window) for window in windows)
                if windows is not None
                else None
            ),
        )
