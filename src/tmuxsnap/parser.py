"""Turn tmux listing output into :mod:`tmuxsnap.models` records.

tmuxsnap.parser
~~~~~~~~~~~~~~~

The ``parse_*_line`` functions are pure: one line in, one record out, or
:exc:`~tmuxsnap.exc.ParseError`. The ``extract_*`` functions also query tmux
for the children of what they parse (windows of a session, panes of a
window), so extraction walks the whole session.

If a window or pane listing cannot be parsed, the parent is still returned
with that child collection set to ``None``. Failures of tmux itself are not
recovered from.
"""

from __future__ import annotations

import logging
import typing as t

from . import exc
from .layout import extract_layout
from .models import SMALL_UINT_MAX, Pane, Session, Window

if t.TYPE_CHECKING:
    from .common import CommandRunner

logger = logging.getLogger(__name__)


class SessionLine(t.NamedTuple):
    """Fields read from one ``list-sessions`` line."""

    name: str
    window_count: int


class WindowLine(t.NamedTuple):
    """Fields read from one ``list-windows`` line."""

    id: int
    name: str
    layout: str


def split_listing(line: str) -> tuple[str, str]:
    """Split a listing line on its first colon.

    >>> split_listing("work: 2 windows (created Mon Oct 19 10:00:00 2026)")
    ('work', ' 2 windows (created Mon Oct 19 10:00:00 2026)')
    """
    prefix, sep, remainder = line.partition(":")
    if not sep:
        raise exc.ParseError("delimiter", line, "no ':' found")
    return prefix, remainder


def trim_marker(text: str) -> str:
    """Strip the status glyphs tmux appends to names.

    >>> trim_marker("editor*")
    'editor'
    >>> trim_marker("logs-")
    'logs'
    """
    end = len(text)
    while end and not text[end - 1].isalnum():
        end -= 1
    return text[:end]


def parse_small_uint(text: str, field: str, line: str | None = None) -> int:
    """Parse a tmux index or count.

    >>> parse_small_uint("12", "id")
    12
    """
    if not text or not (text.isascii() and text.isdigit()):
        raise exc.ParseError(field, line, f"{text!r} is not a number")
    value = int(text)
    if value > SMALL_UINT_MAX:
        raise exc.ParseError(field, line, f"{value} is out of range")
    return value


def _digits(text: str) -> str:
    return "".join(ch for ch in text if ch.isascii() and ch.isdigit())


def parse_session_line(line: str) -> SessionLine:
    """Parse a ``list-sessions`` line.

    >>> parse_session_line("work: 2 windows (created Mon Oct 19 10:00:00 2026)")
    SessionLine(name='work', window_count=2)
    """
    prefix, remainder = split_listing(line)

    name = trim_marker(prefix)
    if not name:
        raise exc.ParseError("name", line, "empty session name")

    tokens = remainder.split()
    if not tokens:
        raise exc.ParseError("window_count", line, "missing")
    return SessionLine(name, parse_small_uint(tokens[0], "window_count", line))


def parse_window_line(line: str, require_trailing_space: bool = False) -> WindowLine:
    """Parse a ``list-windows`` line.

    Digits are filtered out of the part before the first colon, so markers
    around the index are tolerated.

    >>> parse_window_line("1: editor* (1 panes) [8ea0,150x40,0,0,1]")
    WindowLine(id=1, name='editor', layout='8ea0,150x40,0,0,1')
    """
    prefix, remainder = split_listing(line)
    window_id = parse_small_uint(_digits(prefix), "id", line)

    tokens = remainder.split()
    if not tokens:
        raise exc.ParseError("name", line, "missing")
    name = trim_marker(tokens[0])

    return WindowLine(
        window_id,
        name,
        extract_layout(line, require_trailing_space=require_trailing_space),
    )


def parse_pane_line(line: str) -> Pane:
    """Parse a ``list-panes`` line.

    >>> parse_pane_line("0: [75x40] [history 0/2000, 0 bytes] %1 (active)")
    Pane(id=0)
    """
    prefix, _ = split_listing(line)
    return Pane(id=parse_small_uint(_digits(prefix), "id", line))


def find_session(runner: CommandRunner, session_name: str) -> str:
    """Return the ``list-sessions`` line of ``session_name``.

    Raises
    ------
    :exc:`exc.SessionNotFound`
        With the names of the sessions that do exist.
    """
    lines = runner.query("list-sessions")
    available = []
    for line in lines:
        prefix, sep, _ = line.partition(":")
        if not sep:
            continue
        if prefix == session_name:
            return line
        available.append(prefix)
    raise exc.SessionNotFound(session_name, available)


def extract_panes(
    runner: CommandRunner,
    session_name: str,
    window_id: int,
) -> tuple[Pane, ...]:
    """Return the panes of ``session_name:window_id``."""
    lines = runner.query("list-panes", "-t", f"{session_name}:{window_id}")
    return _parse_panes(lines)


def _parse_panes(lines: list[str]) -> tuple[Pane, ...]:
    return tuple(parse_pane_line(line) for line in lines)


def extract_window(runner: CommandRunner, session_name: str, line: str) -> Window:
    """Build a :class:`Window` from its listing line and its pane listing.

    ``pane_count`` is the number of lines ``list-panes`` returns for the
    window; it is not read from the window line.
    """
    window_id, name, layout = parse_window_line(line)

    pane_lines = runner.query("list-panes", "-t", f"{session_name}:{window_id}")
    panes: tuple[Pane, ...] | None
    try:
        panes = _parse_panes(pane_lines)
    except exc.ParseError:
        logger.warning(
            "could not read panes of %s:%s",
            session_name,
            window_id,
            exc_info=True,
        )
        panes = None

    window = Window(
        id=window_id,
        name=name,
        layout=layout,
        pane_count=len(pane_lines),
        panes=panes,
    )
    logger.debug("extracted %r", window)
    return window


def extract_windows(runner: CommandRunner, session_name: str) -> tuple[Window, ...]:
    """Return the windows of ``session_name`` in tmux order."""
    lines = runner.query("list-windows", "-t", session_name)
    return tuple(extract_window(runner, session_name, line) for line in lines)


def extract_session(runner: CommandRunner, line: str) -> Session:
    """Build a :class:`Session` from its ``list-sessions`` line.

    Raises
    ------
    :exc:`exc.ParseError`
        If the session line itself cannot be parsed.
    """
    name, window_count = parse_session_line(line)

    windows: tuple[Window, ...] | None
    try:
        windows = extract_windows(runner, name)
    except exc.ParseError:
        logger.warning("could not read windows of %s", name, exc_info=True)
        windows = None

    session = Session(name=name, window_count=window_count, windows=windows)
    logger.debug("extracted %r", session)
    return session


def snapshot_session(runner: CommandRunner, session_name: str) -> Session:
    """Capture the live session ``session_name``.

    Raises
    ------
    :exc:`exc.SessionNotFound`
        If no session has that name.
    :exc:`exc.ParseError`
        If its ``list-sessions`` line cannot be parsed.
    """
    return extract_session(runner, find_session(runner, session_name))
