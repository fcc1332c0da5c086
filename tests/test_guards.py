"""Tests for scoped notification suppression."""

import pytest

from workspace_sessions.guards import suppress_notifications
from workspace_sessions.ports import SUPPRESS_ALL_EVENTS, SUPPRESS_ALL_MESSAGES


class TestSuppressNotifications:
    """Test the event and message filter guard."""

    def test_events_suppressed_inside(self, host):
        host.event_filter = "BufRead"
        with suppress_notifications(host):
            assert host.event_filter == SUPPRESS_ALL_EVENTS
            assert host.message_filter == "filnxtToOF"
        assert host.event_filter == "BufRead"

    def test_messages_suppressed_on_request(self, host):
        with suppress_notifications(host, messages=True):
            assert host.message_filter == SUPPRESS_ALL_MESSAGES
        assert host.message_filter == "filnxtToOF"

    def test_restored_on_error(self, host):
        with pytest.raises(RuntimeError):
            with suppress_notifications(host, messages=True):
                raise RuntimeError("restore failed")
        assert host.event_filter == ""
        assert host.message_filter == "filnxtToOF"

    def test_display_listeners_silent_inside(self, host):
        shown = []
        host.add_display_listener(lambda document, window: shown.append(window))
        with suppress_notifications(host):
            host.set_current_window(host.current_window())
        assert shown == []
        host.set_current_window(host.current_window())
        assert shown == [host.current_window()]
