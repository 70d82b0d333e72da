"""Pull the layout descriptor out of a ``list-windows`` line.

tmuxsnap.layout
~~~~~~~~~~~~~~~

tmux prints window listings like::

    1: editor* (2 panes) [150x40] [layout 8ea0,150x40,0,0{75x40,0,0,1,74x40,76,0,2}] @1 (active)

The descriptor is the only field that is needed verbatim for
``select-layout``, and no structured field is available for it, so it is
recovered with a two-state scanner instead of a grammar.
"""

from __future__ import annotations

import enum
import logging
import string

logger = logging.getLogger(__name__)

#: Text that introduces the descriptor in tmux's default window format.
LAYOUT_PREFIX = "layout "

#: Characters accepted after the closing bracket of the descriptor.
BOUNDARY_CHARS = frozenset(" ")

_CHECKSUM_LENGTH = 4


class ScanState(enum.Enum):
    """States of :class:`LayoutScanner`."""

    SCANNING = "scanning"
    INSIDE_LAYOUT = "inside-layout"


def _starts_with_checksum(text: str, pos: int) -> bool:
    """Return True if a bare layout checksum (``8ea0,``) starts at ``pos``."""
    end = pos + _CHECKSUM_LENGTH
    if end >= len(text) or text[end] != ",":
        return False
    return all(ch in string.hexdigits for ch in text[pos:end])


class LayoutScanner:
    """Find the bracketed layout token in a window listing line.

    A ``[`` opens the token when it is followed by :data:`LAYOUT_PREFIX`
    (which is skipped) or directly by a layout checksum. Any other bracket,
    such as the ``[150x40]`` size field, is passed over. Inside the token,
    characters are collected until a ``]`` followed by a boundary character.

    Parameters
    ----------
    require_trailing_space : bool
        When False, a ``]`` at the very end of the line also closes the
        token. When True, only ``]`` followed by a space does.

    Examples
    --------
    >>> LayoutScanner().scan("0: zsh* (1 panes) [80x24] [layout b25d,80x24,0,0,0] @0")
    'b25d,80x24,0,0,0'

    >>> LayoutScanner().scan("0: zsh* (1 panes)")
    ''
    """

    def __init__(self, require_trailing_space: bool = False) -> None:
        self.require_trailing_space = require_trailing_space
        self.state = ScanState.SCANNING

    def _is_boundary(self, text: str, pos: int) -> bool:
        if pos >= len(text):
            return not self.require_trailing_space
        return text[pos] in BOUNDARY_CHARS

    def scan(self, text: str) -> str:
        """Return the layout descriptor in ``text``, or ``""`` if there is none."""
        self.state = ScanState.SCANNING
        layout: list[str] = []
        pos = 0

        while pos < len(text):
            ch = text[pos]

            if self.state is ScanState.SCANNING:
                if ch == "[":
                    if text.startswith(LAYOUT_PREFIX, pos + 1):
                        self.state = ScanState.INSIDE_LAYOUT
                        pos += 1 + len(LAYOUT_PREFIX)
                        continue
                    if _starts_with_checksum(text, pos + 1):
                        self.state = ScanState.INSIDE_LAYOUT
                pos += 1
                continue

            if ch == "]" and self._is_boundary(text, pos + 1):
                self.state = ScanState.SCANNING
                return "".join(layout)
            layout.append(ch)
            pos += 1

        if self.state is ScanState.INSIDE_LAYOUT:
            logger.debug("unterminated layout token in %r", text)
            self.state = ScanState.SCANNING
        return ""


def extract_layout(line: str, require_trailing_space: bool = False) -> str:
    """Return the layout descriptor of a window listing line.

    Never raises: a line without a layout token gives ``""``.

    >>> extract_layout("1: editor* (1 panes) [8ea0,150x40,0,0,1]")
    '8ea0,150x40,0,0,1'
    """
    return LayoutScanner(require_trailing_space=require_trailing_space).scan(line)
