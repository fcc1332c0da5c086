"""Sample workspaces built on the in-memory host."""

from __future__ import annotations

from workspace_sessions.models import Orientation
from workspace_sessions.testing import MockEditorHost

A = "/proj/a.txt"
B = "/proj/b.txt"
C = "/proj/c.md"

SAMPLE_FILES = {
    A: ["alpha", "beta", "gamma"],
    B: ["one", "two"],
    C: ["notes"],
}


def add_files(host: MockEditorHost) -> None:
    """Make the sample files readable by a host."""
    for name, lines in SAMPLE_FILES.items():
        host.add_file(name, lines)


def build_side_by_side(host: MockEditorHost) -> tuple[int, int]:
    """Lay out a.txt | b.txt with a 60/40 split and b.txt focused.

    Returns:
        The left and right windows.
    """
    add_files(host)
    left = host.current_window()
    host.open_document(A)
    right = host.split_window(left, Orientation.HORIZONTAL)
    host.open_document(B, window=right)
    host.resize_window(left, Orientation.HORIZONTAL, host.width * 60 // 100)
    host.set_current_window(right)
    return left, right


def build_nested(host: MockEditorHost) -> tuple[int, int, int]:
    """Lay out a.txt | (b.txt over c.md) with c.md focused."""
    add_files(host)
    left = host.current_window()
    host.open_document(A)
    right = host.split_window(left, Orientation.HORIZONTAL)
    host.open_document(B, window=right)
    bottom = host.split_window(right, Orientation.VERTICAL)
    host.open_document(C, window=bottom)
    host.resize_window(right, Orientation.VERTICAL, 30)
    return left, right, bottom
