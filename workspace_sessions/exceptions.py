"""Custom exception hierarchy for workspace sessions.

This module provides a structured exception hierarchy that enables:
- Consistent error handling across capture, restore and storage
- Rich error context for debugging
- Error categorization (not-found, structural, misuse, partial failures)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class WorkspaceSessionsError(Exception):
    """Base exception for all workspace session errors.

    Attributes:
        message: Human-readable error description.
        context: Additional context for debugging.
        timestamp: When the error occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.now()
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Session Errors
# =============================================================================


class SessionError(WorkspaceSessionsError):
    """Base class for session file and session state errors."""

    pass


class SessionNotFoundError(SessionError):
    """Raised when a named session has no backing file."""

    def __init__(
        self,
        name: str,
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["session"] = name
        if file_path:
            ctx["file_path"] = file_path
        self.name = name
        super().__init__(f"No session '{name}'", context=ctx, cause=cause)


class SessionLoadError(SessionError):
    """Raised when a session file exists but cannot be read."""

    def __init__(
        self,
        message: str = "Failed to read session file",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class SessionSaveError(SessionError):
    """Raised when a session file cannot be written."""

    def __init__(
        self,
        message: str = "Failed to write session file",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class SessionFormatError(SessionError):
    """Raised when a persisted session document is malformed.

    This is a structural failure: the layout cannot be rebuilt from a
    document that is missing fields or breaks the model invariants.
    """

    def __init__(
        self,
        message: str = "Malformed session document",
        *,
        file_path: str | None = None,
        field: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        if field:
            ctx["field"] = field
        super().__init__(message, context=ctx, cause=cause)


class SessionNameRequiredError(SessionError):
    """Raised when an operation needs a session name and none can be inferred."""

    def __init__(self, operation: str = "unknown") -> None:
        super().__init__(
            "A session name is required",
            context={"attempted_operation": operation},
        )


# =============================================================================
# Layout Errors
# =============================================================================


class LayoutError(WorkspaceSessionsError):
    """Base class for window layout errors."""

    pass


class LayoutFormatError(LayoutError):
    """Raised when a window tree description has an unknown shape."""

    def __init__(
        self,
        message: str = "Unrecognized window layout",
        *,
        node: Any = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if node is not None:
            ctx["node"] = str(node)[:100]  # Truncate long values
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Partial Failures (isolated per document / per extension)
# =============================================================================


class DocumentMaterializationError(WorkspaceSessionsError):
    """Raised when a saved document cannot be recreated."""

    def __init__(
        self,
        message: str = "Failed to materialize document",
        *,
        document: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if document:
            ctx["document"] = document
        super().__init__(message, context=ctx, cause=cause)


class ExtensionError(WorkspaceSessionsError):
    """Raised when an extension callback fails."""

    def __init__(
        self,
        message: str = "Extension callback failed",
        *,
        extension: str | None = None,
        phase: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if extension:
            ctx["extension"] = extension
        if phase:
            ctx["phase"] = phase
        super().__init__(message, context=ctx, cause=cause)


class HostError(WorkspaceSessionsError):
    """Raised by editor hosts when a host operation cannot be completed."""

    def __init__(
        self,
        message: str = "Host operation failed",
        *,
        operation: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Misuse Errors
# =============================================================================


class UsageError(WorkspaceSessionsError):
    """Base class for programmer errors."""

    pass


class NotConfiguredError(UsageError):
    """Raised when an operation needs setup() to have been called first."""

    def __init__(self, operation: str = "unknown") -> None:
        super().__init__(
            f"Cannot call {operation}() before setup()",
            context={"attempted_operation": operation},
        )


class UnknownHookError(UsageError):
    """Raised when registering or removing a callback on an unknown hook."""

    def __init__(self, hook: str) -> None:
        self.hook = hook
        super().__init__(f"Unrecognized hook '{hook}'", context={"hook": hook})


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(WorkspaceSessionsError):
    """Base class for configuration-related errors."""

    pass


class ConfigLoadError(ConfigError):
    """Raised when configuration file fails to load."""

    def __init__(
        self,
        message: str = "Failed to load configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ConfigError):
    """Raised when configuration validation fails."""

    def __init__(
        self,
        message: str = "Configuration validation failed",
        *,
        field: str | None = None,
        value: Any = None,
        expected: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if field:
            ctx["field"] = field
        if value is not None:
            ctx["value"] = str(value)[:100]
        if expected:
            ctx["expected"] = expected
        super().__init__(message, context=ctx, cause=cause)


class ConfigSaveError(ConfigError):
    """Raised when configuration fails to save."""

    def __init__(
        self,
        message: str = "Failed to save configuration",
        *,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Error Registry for Categorization
# =============================================================================


@dataclass
class ErrorStats:
    """Track error statistics for monitoring."""

    total_count: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    recent_errors: list[tuple[datetime, str, str]] = field(default_factory=list)
    max_recent: int = 100

    def record(self, error: Exception) -> None:
        """Record an error occurrence."""
        self.total_count += 1
        type_name = type(error).__name__
        self.by_type[type_name] = self.by_type.get(type_name, 0) + 1

        self.recent_errors.append((datetime.now(), type_name, str(error)[:200]))
        if len(self.recent_errors) > self.max_recent:
            self.recent_errors.pop(0)

    def reset(self) -> None:
        """Clear all recorded errors."""
        self.total_count = 0
        self.by_type.clear()
        self.recent_errors.clear()


# Global error stats tracker
error_stats = ErrorStats()


def record_error(error: Exception) -> None:
    """Record an error to global stats."""
    error_stats.record(error)
