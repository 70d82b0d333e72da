"""Command-line interface for tmuxsnap.

tmuxsnap.cli
~~~~~~~~~~~~

.. code-block:: console

    $ tmuxsnap create work          # write work.yaml from the live session
    $ tmuxsnap load work.yaml       # rebuild it and attach
    $ tmuxsnap                      # same as ``tmuxsnap load example.yaml``
"""

from __future__ import annotations

import argparse
import logging
import sys
import typing as t

from . import exc
from .__about__ import __version__
from .common import SubprocessRunner
from .environment import Environment
from .materialize import SessionMaterializer
from .parser import snapshot_session
from .persistence import DEFAULT_SNAPSHOT_FILE, read_snapshot, write_snapshot

if t.TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def create_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``tmuxsnap``."""
    parser = argparse.ArgumentParser(
        prog="tmuxsnap",
        description="Save the layout of a tmux session and rebuild it later.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-L",
        "--socket-name",
        help="tmux server socket name (passed to tmux -L)",
    )
    parser.add_argument(
        "-S",
        "--socket-path",
        help="tmux server socket path (passed to tmux -S)",
    )
    parser.add_argument(
        "-f",
        "--config-file",
        help="tmux configuration file (passed to tmux -f)",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        type=str.upper,
        help="log level (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser(
        "create",
        help="Snapshot an active session into <session_name>.yaml.",
    )
    create.add_argument("session_name", help="name of a live tmux session")
    create.add_argument(
        "-d",
        "--directory",
        help="directory the snapshot is written to (default: current directory)",
    )

    load = subparsers.add_parser(
        "load",
        help="Rebuild a session from a snapshot file.",
    )
    load.add_argument("path", help="snapshot file to load")
    load.add_argument(
        "--no-attach",
        dest="attach",
        action="store_false",
        help="create the session without attaching or switching to it",
    )

    subparsers.add_parser("update", help="Update an existing snapshot (reserved).")

    return parser


def command_create(
    runner: SubprocessRunner,
    session_name: str,
    directory: str | None = None,
) -> None:
    """Write a snapshot of the live session ``session_name``."""
    session = snapshot_session(runner, session_name)
    path = write_snapshot(session, directory)
    print(path)


def command_load(
    runner: SubprocessRunner,
    environment: Environment,
    path: str,
    attach: bool = True,
) -> None:
    """Rebuild the session stored in ``path``."""
    session = read_snapshot(path)
    SessionMaterializer(runner, environment).materialize(session, attach=attach)


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``tmuxsnap``.

    Parameters
    ----------
    argv : list[str] | None
        CLI arguments (excluding the program name).

    Returns
    -------
    int
        Exit status code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    environment = Environment.from_os()
    runner = SubprocessRunner(
        socket_name=args.socket_name,
        socket_path=args.socket_path,
        config_file=args.config_file,
    )

    try:
        if args.command == "create":
            command_create(runner, args.session_name, args.directory)
        elif args.command == "load":
            command_load(runner, environment, args.path, attach=args.attach)
        elif args.command == "update":
            print("tmuxsnap: update is not implemented", file=sys.stderr)
            return 2
        else:
            command_load(runner, environment, DEFAULT_SNAPSHOT_FILE)
    except (exc.TmuxSnapException, OSError) as e:
        logger.debug("command failed", exc_info=True)
        print(f"tmuxsnap: {e}", file=sys.stderr)
        return 1

    return 0
