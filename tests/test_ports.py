"""Tests for the editor host ports and the in-memory host."""

import pytest

from workspace_sessions.exceptions import HostError
from workspace_sessions.models import Orientation
from workspace_sessions.ports import (
    DocumentHost,
    EditorHost,
    OptionScope,
    WindowHost,
    WorkspaceHost,
)
from workspace_sessions.testing import MockEditorHost

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


class TestProtocolConformance:
    """MockEditorHost implements every port."""

    @pytest.mark.parametrize("protocol", [WindowHost, DocumentHost, WorkspaceHost, EditorHost])
    def test_isinstance(self, protocol):
        assert isinstance(MockEditorHost(), protocol)


class TestInitialState:
    """Test a freshly started host."""

    def test_one_tab_one_window(self, host):
        assert len(host.list_tabs()) == 1
        window = host.current_window()
        assert host.tab_layout(host.current_tab()) == ("leaf", window)
        assert host.window_size(window) == (100, 40)

    def test_empty_unnamed_document(self, host):
        document = host.window_document(host.current_window())
        assert host.document_name(document) == ""
        assert host.is_listed(document)
        assert host.line_count(document) == 1


class TestSplitWindow:
    """Test splitting windows."""

    def test_vertical_split_halves_height(self, host):
        top = host.current_window()
        bottom = host.split_window(top, V)
        assert host.window_size(top) == (100, 20)
        assert host.window_size(bottom) == (100, 20)
        assert host.tab_layout(host.current_tab()) == ("col", [("leaf", top), ("leaf", bottom)])

    def test_new_window_shows_same_document(self, host):
        host.add_file("/proj/a.txt", ["x", "y"])
        host.open_document("/proj/a.txt")
        left = host.current_window()
        host.set_cursor(left, 2, 0)
        right = host.split_window(left, H)
        assert host.window_document(right) == host.window_document(left)
        assert host.get_cursor(right) == (2, 0)
        assert host.current_window() == right

    def test_odd_extent_keeps_larger_half(self):
        host = MockEditorHost(width=41, height=10)
        left = host.current_window()
        right = host.split_window(left, H)
        assert host.window_size(left) == (21, 10)
        assert host.window_size(right) == (20, 10)

    def test_same_orientation_adds_sibling(self, host):
        first = host.current_window()
        second = host.split_window(first, H)
        third = host.split_window(second, H)
        layout = host.tab_layout(host.current_tab())
        assert layout == ("row", [("leaf", first), ("leaf", second), ("leaf", third)])

    def test_cross_orientation_nests(self, host):
        left = host.current_window()
        right = host.split_window(left, H)
        below = host.split_window(right, V)
        layout = host.tab_layout(host.current_tab())
        assert layout == ("row", [("leaf", left), ("col", [("leaf", right), ("leaf", below)])])

    def test_no_room(self):
        host = MockEditorHost(width=1, height=1)
        with pytest.raises(HostError):
            host.split_window(host.current_window(), H)


class TestResizeWindow:
    """Test resizing windows."""

    def test_takes_from_following_sibling(self, host):
        left = host.current_window()
        right = host.split_window(left, H)
        host.resize_window(left, H, 70)
        assert host.window_size(left)[0] == 70
        assert host.window_size(right)[0] == 30

    def test_last_window_takes_from_preceding(self, host):
        left = host.current_window()
        right = host.split_window(left, H)
        host.resize_window(right, H, 80)
        assert host.window_size(left)[0] == 20
        assert host.window_size(right)[0] == 80

    def test_clamped_to_available_space(self, host):
        left = host.current_window()
        right = host.split_window(left, H)
        host.resize_window(left, H, 500)
        assert host.window_size(left)[0] == 99
        assert host.window_size(right)[0] == 1

    def test_shrinking_gives_to_next(self, host):
        left = host.current_window()
        middle = host.split_window(left, H)
        right = host.split_window(middle, H)
        host.resize_window(left, H, 10)
        widths = [host.window_size(w)[0] for w in (left, middle, right)]
        assert widths == [10, 65, 25]

    def test_resizing_nested_window_resizes_container(self, host):
        left = host.current_window()
        right = host.split_window(left, H)
        below = host.split_window(right, V)
        host.resize_window(below, H, 30)
        assert host.window_size(right) == (30, 20)
        assert host.window_size(below) == (30, 20)
        assert host.window_size(left) == (70, 40)

    def test_no_matching_split_is_noop(self, host):
        top = host.current_window()
        bottom = host.split_window(top, V)
        host.resize_window(top, H, 10)
        assert host.window_size(top) == (100, 20)
        assert host.window_size(bottom) == (100, 20)


class TestDocuments:
    """Test documents and options of the in-memory host."""

    def test_add_document_finds_existing(self, host):
        first = host.add_document("/proj/a.txt")
        assert host.add_document("/proj/a.txt") == first
        assert host.is_loaded(first) is False

    def test_unavailable_document(self, host):
        host.unavailable.add("/proj/gone.txt")
        with pytest.raises(HostError):
            host.add_document("/proj/gone.txt")

    def test_cursor_out_of_range(self, host):
        host.add_file("/proj/a.txt", ["ab"])
        host.open_document("/proj/a.txt")
        with pytest.raises(HostError):
            host.set_cursor(host.current_window(), 2, 0)
        with pytest.raises(HostError):
            host.set_cursor(host.current_window(), 1, 2)

    def test_wipe_document_removed_when_hidden(self, host):
        document = host.create_scratch_document()
        host.set_option("bufhidden", "wipe", OptionScope.DOCUMENT, document)
        window = host.current_window()
        host.set_window_document(window, document)
        host.set_window_document(window, host.add_document("/proj/a.txt"))
        assert document not in host.list_documents()

    def test_option_scope_checked(self, host):
        with pytest.raises(HostError):
            host.set_option("filetype", "text", OptionScope.GLOBAL)

    def test_buflisted_maps_to_listed_flag(self, host):
        document = host.add_document("/proj/a.txt")
        host.set_option("buflisted", False, OptionScope.DOCUMENT, document)
        assert host.is_listed(document) is False
        assert host.get_option("buflisted", OptionScope.DOCUMENT, document) is False

    def test_close_other_windows(self, host):
        first = host.current_window()
        second = host.split_window(first, H)
        host.close_other_windows()
        assert host.tab_windows(host.current_tab()) == [second]
        assert host.window_size(second) == (100, 40)

    def test_new_tab_after_current(self, host):
        first = host.current_tab()
        third = host.new_tab()
        host.set_current_tab(first)
        second = host.new_tab()
        assert host.list_tabs() == [first, second, third]
