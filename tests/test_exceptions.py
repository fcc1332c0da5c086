"""Tests for custom exception hierarchy."""

import pytest

from workspace_sessions.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
    ConfigValidationError,
    DocumentMaterializationError,
    ErrorStats,
    ExtensionError,
    HostError,
    LayoutError,
    LayoutFormatError,
    NotConfiguredError,
    SessionError,
    SessionFormatError,
    SessionLoadError,
    SessionNameRequiredError,
    SessionNotFoundError,
    SessionSaveError,
    UnknownHookError,
    UsageError,
    WorkspaceSessionsError,
    error_stats,
    record_error,
)


class TestExceptionHierarchy:
    """Test that exceptions are properly organized in hierarchy."""

    def test_base_exception_properties(self):
        """WorkspaceSessionsError has expected properties."""
        exc = WorkspaceSessionsError("test message", context={"key": "value"})
        assert exc.message == "test message"
        assert exc.context == {"key": "value"}
        assert exc.timestamp is not None
        assert exc.cause is None

    def test_base_exception_with_cause(self):
        cause = ValueError("original")
        exc = WorkspaceSessionsError("wrapped", cause=cause)
        assert exc.cause is cause

    def test_str_includes_context(self):
        exc = WorkspaceSessionsError("failed", context={"a": 1})
        assert str(exc) == "failed (a=1)"

    def test_str_without_context(self):
        assert str(WorkspaceSessionsError("failed")) == "failed"

    @pytest.mark.parametrize(
        "exc_class,parent",
        [
            (SessionNotFoundError, SessionError),
            (SessionLoadError, SessionError),
            (SessionSaveError, SessionError),
            (SessionFormatError, SessionError),
            (SessionNameRequiredError, SessionError),
            (LayoutFormatError, LayoutError),
            (NotConfiguredError, UsageError),
            (UnknownHookError, UsageError),
            (ConfigLoadError, ConfigError),
            (ConfigValidationError, ConfigError),
            (ConfigSaveError, ConfigError),
            (DocumentMaterializationError, WorkspaceSessionsError),
            (ExtensionError, WorkspaceSessionsError),
            (HostError, WorkspaceSessionsError),
        ],
    )
    def test_inheritance(self, exc_class, parent):
        assert issubclass(exc_class, parent)
        assert issubclass(exc_class, WorkspaceSessionsError)


class TestSpecificExceptions:
    """Test messages and context of specific exceptions."""

    def test_session_not_found(self):
        exc = SessionNotFoundError("work", file_path="/tmp/work.json")
        assert exc.name == "work"
        assert exc.message == "No session 'work'"
        assert exc.context == {"session": "work", "file_path": "/tmp/work.json"}

    def test_session_format_error_field(self):
        exc = SessionFormatError("bad sizes", field="tabs[0].layout")
        assert exc.context["field"] == "tabs[0].layout"

    def test_not_configured(self):
        exc = NotConfiguredError("load_extension")
        assert exc.message == "Cannot call load_extension() before setup()"

    def test_unknown_hook(self):
        exc = UnknownHookError("on_quit")
        assert exc.hook == "on_quit"
        assert "on_quit" in exc.message

    def test_layout_format_error_truncates_node(self):
        exc = LayoutFormatError(node="x" * 500)
        assert len(exc.context["node"]) == 100

    def test_extension_error_context(self):
        exc = ExtensionError(extension="quickfix", phase="save")
        assert exc.context == {"extension": "quickfix", "phase": "save"}

    def test_host_error_operation(self):
        exc = HostError("no room", operation="split")
        assert exc.context["operation"] == "split"


class TestErrorStats:
    """Test error statistics tracking."""

    def test_record_counts_by_type(self):
        stats = ErrorStats()
        stats.record(SessionFormatError())
        stats.record(SessionFormatError())
        stats.record(HostError())
        assert stats.total_count == 3
        assert stats.by_type == {"SessionFormatError": 2, "HostError": 1}

    def test_recent_errors_bounded(self):
        stats = ErrorStats(max_recent=2)
        for i in range(5):
            stats.record(ValueError(str(i)))
        assert len(stats.recent_errors) == 2
        assert stats.recent_errors[-1][2] == "4"

    def test_reset(self):
        stats = ErrorStats()
        stats.record(HostError())
        stats.reset()
        assert stats.total_count == 0
        assert stats.by_type == {}
        assert stats.recent_errors == []

    def test_record_error_uses_global_stats(self):
        before = error_stats.total_count
        record_error(HostError())
        assert error_stats.total_count == before + 1
