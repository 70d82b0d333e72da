"""Fixtures for tmuxsnap tests."""

from __future__ import annotations

import pytest

from tests.helpers import FakeRunner

WORK_SESSIONS = [
    "scratch: 1 windows (created Mon Oct 19 09:12:44 2026)",
    "work: 2 windows (created Mon Oct 19 10:00:00 2026) (attached)",
]

WORK_WINDOWS = [
    "1: editor* (2 panes) [150x40] "
    "[layout 8ea0,150x40,0,0{75x40,0,0,1,74x40,76,0,2}] @1 (active)",
    "2: logs- (1 panes) [150x40] [layout b25d,150x40,0,0,3] @2",
]

WORK_PANES_1 = [
    "0: [75x40] [history 0/2000, 0 bytes] %1 (active)",
    "1: [74x40] [history 12/2000, 1024 bytes] %2",
]

WORK_PANES_2 = [
    "0: [150x40] [history 0/2000, 0 bytes] %3 (active)",
]


@pytest.fixture
def work_runner() -> FakeRunner:
    """Runner answering listings for a live two-window ``work`` session."""
    return FakeRunner(
        {
            ("list-sessions",): WORK_SESSIONS,
            ("list-windows", "-t", "work"): WORK_WINDOWS,
            ("list-panes", "-t", "work:1"): WORK_PANES_1,
            ("list-panes", "-t", "work:2"): WORK_PANES_2,
        },
    )
