"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from numeral_input.reconcile import FocusGained, InputState, initialize, reduce


@pytest.fixture(autouse=True)
def config_path(tmp_path: Path, monkeypatch) -> Path:
    """Point the config file at a temporary location for every test.

    _CONFIG_PATH is computed at import time, so it is patched directly.
    """
    path = tmp_path / ".config" / "numeral-input" / "config.toml"
    monkeypatch.setattr("numeral_input.config._CONFIG_PATH", path)
    return path


@pytest.fixture
def focused_state() -> InputState:
    """A focused field that was showing 1,000 before it gained focus."""
    return reduce(initialize(1000, "0,0"), FocusGained()).state
