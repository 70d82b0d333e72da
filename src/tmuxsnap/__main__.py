"""Entrypoint for running tmuxsnap as a module."""

from __future__ import annotations

from tmuxsnap.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
