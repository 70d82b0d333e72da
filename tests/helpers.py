"""Test helpers for driving tmuxsnap without a tmux server."""

from __future__ import annotations

import typing as t

from tmuxsnap import exc

Call = tuple[str, ...]


class FakeRunner:
    """Record tmux commands and answer queries from canned listings.

    Every call is appended to :attr:`calls` as ``("run" | "query", *args)``.
    Queries without a canned answer fail like tmux would for a missing target.
    """

    def __init__(
        self,
        listings: dict[Call, list[str]] | None = None,
        fail_on: Call | None = None,
    ) -> None:
        self.listings = dict(listings or {})
        self.fail_on = fail_on
        self.calls: list[Call] = []

    def _check(self, args: Call) -> None:
        if self.fail_on is not None and args[: len(self.fail_on)] == self.fail_on:
            raise exc.ExternalProcessError(["tmux", *args], 1, ["boom"])

    def run(self, *args: t.Any) -> None:
        call = tuple(str(a) for a in args)
        self.calls.append(("run", *call))
        self._check(call)

    def query(self, *args: t.Any) -> list[str]:
        call = tuple(str(a) for a in args)
        self.calls.append(("query", *call))
        self._check(call)
        if call not in self.listings:
            raise exc.ExternalProcessError(["tmux", *call], 1, ["can't find target"])
        return list(self.listings[call])

    @property
    def commands(self) -> list[Call]:
        """State-changing commands only, in issue order."""
        return [call[1:] for call in self.calls if call[0] == "run"]
