"""Read and write session snapshots as YAML."""

from __future__ import annotations

import logging
import os
import pathlib
import tempfile
import typing as t

import yaml

from . import exc
from .models import Session

if t.TYPE_CHECKING:
    from os import PathLike

logger = logging.getLogger(__name__)

#: Extension of snapshot files.
SNAPSHOT_SUFFIX = ".yaml"

#: Snapshot loaded when no path is given on the command line.
DEFAULT_SNAPSHOT_FILE = "example.yaml"


def save(session: Session) -> bytes:
    """Encode ``session`` as YAML.

    >>> print(save(Session(name="work", window_count=0)).decode())
    name: work
    window_count: 0
    windows: null
    <BLANKLINE>
    """
    return yaml.safe_dump(
        session.to_dict(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    ).encode("utf-8")


def load(data: bytes) -> Session:
    """Decode a YAML snapshot.

    Raises
    ------
    :exc:`exc.DecodeError`
        If ``data`` is not UTF-8 YAML describing a session.
    """
    try:
        raw = yaml.safe_load(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise exc.DecodeError("<document>", f"not UTF-8 ({e.reason})") from e
    except yaml.YAMLError as e:
        raise exc.DecodeError("<document>", f"invalid YAML ({e})") from e
    return Session.from_dict(raw)


def snapshot_filename(session_name: str) -> str:
    """Return the file name a snapshot of ``session_name`` is written to.

    >>> snapshot_filename("work")
    'work.yaml'
    """
    return f"{session_name}{SNAPSHOT_SUFFIX}"


def write_snapshot(
    session: Session,
    directory: str | PathLike[str] | None = None,
) -> pathlib.Path:
    """Write ``session`` to ``<directory>/<name>.yaml`` and return the path.

    The file is written to a temporary name first and renamed into place.
    """
    directory = pathlib.Path(directory) if directory is not None else pathlib.Path()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / snapshot_filename(session.name)

    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=directory,
        delete=False,
        suffix=SNAPSHOT_SUFFIX,
    ) as f:
        f.write(save(session))
        temp_path = pathlib.Path(f.name)

    os.replace(temp_path, path)
    logger.debug("wrote snapshot of %s to %s", session.name, path)
    return path


def read_snapshot(path: str | PathLike[str]) -> Session:
    """Load the snapshot stored at ``path``.

    Raises
    ------
    :exc:`exc.DecodeError`
        If the file does not hold a valid snapshot.
    OSError
        If the file cannot be read.
    """
    data = pathlib.Path(path).read_bytes()
    logger.debug("read %d bytes from %s", len(data), path)
    return load(data)
