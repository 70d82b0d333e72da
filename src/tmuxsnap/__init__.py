"""tmuxsnap, save the shape of a tmux session and rebuild it later."""

from .__about__ import (
    __author__,
    __copyright__,
    __description__,
    __email__,
    __license__,
    __package_name__,
    __title__,
    __version__,
)
from .common import SubprocessRunner
from .environment import Environment
from .materialize import SessionMaterializer, materialize
from .models import Pane, Session, Window
from .parser import snapshot_session
from .persistence import load, read_snapshot, save, write_snapshot

__all__ = (
    "Environment",
    "Pane",
    "Session",
    "SessionMaterializer",
    "SubprocessRunner",
    "Window",
    "__author__",
    "__copyright__",
    "__description__",
    "__email__",
    "__license__",
    "__package_name__",
    "__title__",
    "__version__",
    "load",
    "materialize",
    "read_snapshot",
    "save",
    "snapshot_session",
    "write_snapshot",
)
