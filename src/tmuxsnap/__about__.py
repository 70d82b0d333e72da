"""Metadata package for tmuxsnap."""

from __future__ import annotations

__title__ = "tmuxsnap"
__package_name__ = "tmuxsnap"
__version__ = "0.1.0"
__description__ = "Save the shape of a tmux session to YAML and rebuild it later"
__email__ = "tmuxsnap@example.org"
__author__ = "tmuxsnap contributors"
__github__ = "https://github.com/tmuxsnap/tmuxsnap"
__docs__ = "https://github.com/tmuxsnap/tmuxsnap#readme"
__tracker__ = "https://github.com/tmuxsnap/tmuxsnap/issues"
__pypi__ = "https://pypi.org/project/tmuxsnap/"
__license__ = "MIT"
__copyright__ = "Copyright 2026- tmuxsnap contributors"
