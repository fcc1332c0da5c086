"""Workspace Sessions.

Captures the live window, tab and document state of an editor into named
session files and restores it later, scaling the recorded window layout to
the current display.

Public API Usage:
    from workspace_sessions import SessionManager, load_config

    manager = SessionManager(host)
    manager.setup(load_config())
    manager.save("work")
    manager.load("work")

    # Tab-scoped sessions
    manager.save_tab("notes")

    # Data models for type hints
    from workspace_sessions import SessionDocument, Split, Leaf
"""

__version__ = "0.1.0"

# =============================================================================
# Session Management
# =============================================================================

from workspace_sessions.manager import SessionManager
from workspace_sessions.store import SessionStore, documents_in_layout
from workspace_sessions.layout import LayoutCodec, Scale
from workspace_sessions.registry import DocumentRegistry
from workspace_sessions.deferred import DeferredInitQueue
from workspace_sessions.extensions import ExtensionRegistry
from workspace_sessions.hooks import (
    HOOK_NAMES,
    POST_LOAD,
    POST_SAVE,
    PRE_LOAD,
    PRE_SAVE,
    HookRegistry,
)
from workspace_sessions.guards import suppress_notifications

# =============================================================================
# Core Data Models
# =============================================================================

from workspace_sessions.models import (
    # Layout models
    Orientation,
    Position,
    Leaf,
    Split,
    LayoutNode,
    # Session models
    DocumentRecord,
    TabRecord,
    Geometry,
    SessionDocument,
    # Options
    ResetPolicy,
    SaveOptions,
    LoadOptions,
    AttachmentInfo,
    # Configuration models
    ExtensionConfig,
    SessionsConfig,
)

# =============================================================================
# Host Ports
# =============================================================================

from workspace_sessions.ports import (
    DocumentHost,
    EditorHost,
    OptionScope,
    WindowHost,
    WorkspaceHost,
)

# =============================================================================
# Configuration and Storage
# =============================================================================

from workspace_sessions.config import (
    get_session_dir,
    get_session_file,
    load_config,
    save_config,
)
from workspace_sessions.storage import (
    delete_session,
    list_sessions,
    read_session,
    write_session,
)

# =============================================================================
# Errors
# =============================================================================

from workspace_sessions.exceptions import (
    WorkspaceSessionsError,
    SessionError,
    SessionNotFoundError,
    SessionFormatError,
    SessionNameRequiredError,
    LayoutFormatError,
    HostError,
    UsageError,
    NotConfiguredError,
    UnknownHookError,
    ConfigError,
)

# =============================================================================
# Public API Exports
# =============================================================================

__all__ = [
    # Version info
    "__version__",
    # Session management
    "SessionManager",
    "SessionStore",
    "documents_in_layout",
    "LayoutCodec",
    "Scale",
    "DocumentRegistry",
    "DeferredInitQueue",
    "ExtensionRegistry",
    "HookRegistry",
    "HOOK_NAMES",
    "PRE_SAVE",
    "POST_SAVE",
    "PRE_LOAD",
    "POST_LOAD",
    "suppress_notifications",
    # Layout models
    "Orientation",
    "Position",
    "Leaf",
    "Split",
    "LayoutNode",
    # Session models
    "DocumentRecord",
    "TabRecord",
    "Geometry",
    "SessionDocument",
    # Options
    "ResetPolicy",
    "SaveOptions",
    "LoadOptions",
    "AttachmentInfo",
    # Configuration models
    "ExtensionConfig",
    "SessionsConfig",
    # Host ports
    "EditorHost",
    "WindowHost",
    "DocumentHost",
    "WorkspaceHost",
    "OptionScope",
    # Configuration and storage
    "load_config",
    "save_config",
    "get_session_dir",
    "get_session_file",
    "list_sessions",
    "read_session",
    "write_session",
    "delete_session",
    # Errors
    "WorkspaceSessionsError",
    "SessionError",
    "SessionNotFoundError",
    "SessionFormatError",
    "SessionNameRequiredError",
    "LayoutFormatError",
    "HostError",
    "UsageError",
    "NotConfiguredError",
    "UnknownHookError",
    "ConfigError",
]
