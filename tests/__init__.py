"""Tests for tmuxsnap."""
