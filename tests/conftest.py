"""Shared fixtures for workspace session tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from workspace_sessions.testing import MockEditorHost


@pytest.fixture
def host():
    """A 100x40 in-memory editor host."""
    return MockEditorHost(width=100, height=40)


@pytest.fixture
def data_dir(tmp_path):
    """Redirect session storage and the config file to a temporary directory."""
    with patch("workspace_sessions.config.DATA_DIR", tmp_path / "data"), patch(
        "workspace_sessions.config.CONFIG_PATH", tmp_path / "config.json"
    ):
        yield tmp_path / "data"
