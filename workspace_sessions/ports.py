"""Editor host abstraction layer.

This module defines protocols (interfaces) for the editor that owns the live
windows, tabs and documents, so that capture and restore work against any
host implementation (a real editor adapter, or the in-memory host in
``workspace_sessions.testing``).

The abstraction follows the "ports and adapters" pattern: the session core
only talks to these ports, adapters implement them. Handles (tabs, windows,
documents) are opaque values owned by the host.

Window tree descriptions returned by ``tab_layout`` are nested tuples:
``("row", [child, ...])`` for children laid out side by side,
``("col", [child, ...])`` for stacked children and ``("leaf", window)`` for
a single window.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from workspace_sessions.models import Orientation

Tab = Any
Window = Any
Document = Any

HostLayout = Union[tuple[str, Any], list[Any]]
"""Nested window tree description, see module docstring."""

DisplayListener = Callable[[Document, Window], None]


class OptionScope(Enum):
    """Where an editor option lives."""

    GLOBAL = "global"
    TAB = "tab"
    DOCUMENT = "document"
    WINDOW = "window"


# Values for the event and message filters while a session is captured or restored
SUPPRESS_ALL_EVENTS = "all"
SUPPRESS_ALL_MESSAGES = "aAF"


# =============================================================================
# Protocols
# =============================================================================


@runtime_checkable
class WindowHost(Protocol):
    """Protocol for tab and window tree introspection and mutation."""

    @abstractmethod
    def list_tabs(self) -> list[Tab]:
        """Return all tabs in display order."""
        ...

    @abstractmethod
    def current_tab(self) -> Tab:
        ...

    @abstractmethod
    def set_current_tab(self, tab: Tab) -> None:
        ...

    @abstractmethod
    def new_tab(self) -> Tab:
        """Open a new tab holding one window with an empty document.

        The new tab becomes current.
        """
        ...

    @abstractmethod
    def tab_is_valid(self, tab: Tab) -> bool:
        ...

    @abstractmethod
    def close_other_tabs(self) -> None:
        """Close every tab except the current one."""
        ...

    @abstractmethod
    def tab_layout(self, tab: Tab) -> HostLayout:
        """Describe the window tree of a tab (see module docstring)."""
        ...

    @abstractmethod
    def tab_windows(self, tab: Tab) -> list[Window]:
        ...

    @abstractmethod
    def tab_cwd(self, tab: Tab) -> str | None:
        """Return the tab-local working directory, or None if the tab has none."""
        ...

    @abstractmethod
    def set_tab_cwd(self, tab: Tab, path: str) -> None:
        ...

    @abstractmethod
    def current_window(self) -> Window:
        ...

    @abstractmethod
    def set_current_window(self, window: Window) -> None:
        """Focus a window, switching tabs if needed.

        Fires display listeners unless events are suppressed.
        """
        ...

    @abstractmethod
    def close_other_windows(self) -> None:
        """Close every window of the current tab except the current one."""
        ...

    @abstractmethod
    def split_window(self, window: Window, orientation: Orientation) -> Window:
        """Split a window and return the new one.

        The new window is placed right of (horizontal) or below (vertical)
        the split window and initially shows the same document.
        """
        ...

    @abstractmethod
    def resize_window(self, window: Window, orientation: Orientation, size: int) -> None:
        """Set the extent of a window along an axis.

        Space is taken from or given to neighbouring windows; the host clamps
        the request to what the surrounding layout allows.
        """
        ...

    @abstractmethod
    def window_size(self, window: Window) -> tuple[int, int]:
        """Return (width, height) of a window in cells."""
        ...

    @abstractmethod
    def window_document(self, window: Window) -> Document:
        ...

    @abstractmethod
    def set_window_document(self, window: Window, document: Document) -> None:
        ...

    @abstractmethod
    def get_cursor(self, window: Window) -> tuple[int, int]:
        """Return (line, column), 1-based line and 0-based column."""
        ...

    @abstractmethod
    def set_cursor(self, window: Window, line: int, column: int) -> None:
        """Move the cursor.

        Raises:
            HostError: If the position is outside the document.
        """
        ...


@runtime_checkable
class DocumentHost(Protocol):
    """Protocol for document enumeration, creation and inspection."""

    @abstractmethod
    def list_documents(self) -> list[Document]:
        ...

    @abstractmethod
    def document_name(self, document: Document) -> str:
        """Return the resolved path of a document, or "" if it has none."""
        ...

    @abstractmethod
    def document_type(self, document: Document) -> str:
        """Return the document type ("" for ordinary files, "help", "nofile", ...)."""
        ...

    @abstractmethod
    def is_listed(self, document: Document) -> bool:
        ...

    @abstractmethod
    def is_loaded(self, document: Document) -> bool:
        ...

    @abstractmethod
    def line_count(self, document: Document) -> int:
        ...

    @abstractmethod
    def line_length(self, document: Document, line: int) -> int:
        ...

    @abstractmethod
    def get_mark(self, document: Document) -> tuple[int, int]:
        """Return the last cursor position recorded for a document."""
        ...

    @abstractmethod
    def add_document(self, name: str) -> Document:
        """Find a document by name, creating it (unloaded) if needed.

        Raises:
            HostError: If no document can be created for the name.
        """
        ...

    @abstractmethod
    def load_document(self, document: Document) -> None:
        """Read the content of a document.

        Raises:
            HostError: If the content cannot be read.
        """
        ...

    @abstractmethod
    def edit_document(self, document: Document) -> None:
        """Run full initialization (type detection, highlighting, swap checks)."""
        ...

    @abstractmethod
    def create_scratch_document(self) -> Document:
        """Create an empty, unnamed, unlisted document."""
        ...

    @abstractmethod
    def delete_document(self, document: Document) -> None:
        """Delete a document, discarding unsaved changes."""
        ...


@runtime_checkable
class WorkspaceHost(Protocol):
    """Protocol for options, working directory, display and notifications."""

    @abstractmethod
    def option_scope(self, name: str) -> OptionScope | None:
        """Return the scope of an option, or None for unknown options."""
        ...

    @abstractmethod
    def get_option(self, name: str, scope: OptionScope, handle: Any = None) -> Any:
        ...

    @abstractmethod
    def set_option(
        self, name: str, value: Any, scope: OptionScope, handle: Any = None
    ) -> None:
        """Set an option.

        Raises:
            HostError: If the value is rejected.
        """
        ...

    @abstractmethod
    def get_cwd(self) -> str:
        """Return the global working directory."""
        ...

    @abstractmethod
    def set_cwd(self, path: str) -> None:
        ...

    @abstractmethod
    def display_size(self) -> tuple[int, int]:
        """Return (width, height) available to windows."""
        ...

    @abstractmethod
    def get_event_filter(self) -> str:
        """Return which UI events are currently ignored."""
        ...

    @abstractmethod
    def set_event_filter(self, value: str) -> None:
        ...

    @abstractmethod
    def get_message_filter(self) -> str:
        """Return which messages and prompts are currently suppressed."""
        ...

    @abstractmethod
    def set_message_filter(self, value: str) -> None:
        ...

    @abstractmethod
    def notify(self, message: str, level: int = logging.INFO) -> None:
        """Show a message through the host's notification channel."""
        ...

    @abstractmethod
    def add_display_listener(self, listener: DisplayListener) -> None:
        """Call ``listener(document, window)`` whenever a document is displayed."""
        ...


@runtime_checkable
class EditorHost(WindowHost, DocumentHost, WorkspaceHost, Protocol):
    """Complete host interface consumed by the session core."""

    pass
