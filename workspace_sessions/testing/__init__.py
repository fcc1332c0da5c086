"""Testing utilities for workspace_sessions.

This package provides an in-memory implementation of the editor host
protocols for unit testing without a running editor.
"""

from workspace_sessions.testing.mock_host import (
    Frame,
    MockDocument,
    MockEditorHost,
    MockTab,
    MockWindow,
)

__all__ = [
    "MockEditorHost",
    "MockDocument",
    "MockWindow",
    "MockTab",
    "Frame",
]
