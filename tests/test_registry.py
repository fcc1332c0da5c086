"""Tests for the document registry."""

import logging

from workspace_sessions.deferred import DeferredInitQueue
from workspace_sessions.models import DEFAULT_OPTIONS, DocumentRecord, Position
from workspace_sessions.registry import DocumentRegistry, clamp_position

from .helpers import A, B, C, add_files


class TestDefaultFilter:
    """Test which documents are persisted by default."""

    def test_listed_named_file_kept(self, host):
        add_files(host)
        document = host.add_document(A)
        assert DocumentRegistry(host).default_filter(document) is True

    def test_unlisted_file_rejected(self, host):
        add_files(host)
        document = host.add_document(A)
        host.documents[document].listed = False
        assert DocumentRegistry(host).default_filter(document) is False

    def test_unnamed_document_rejected(self, host):
        document = host.window_document(host.current_window())
        assert DocumentRegistry(host).default_filter(document) is False

    def test_special_document_rejected(self, host):
        assert DocumentRegistry(host).default_filter(host.create_scratch_document()) is False

    def test_help_document_kept_even_unlisted(self, host):
        document = host.add_document("/usr/share/doc/help.txt")
        host.documents[document].doc_type = "help"
        host.documents[document].listed = False
        assert DocumentRegistry(host).default_filter(document) is True

    def test_acwrite_document_kept(self, host):
        document = host.add_document("scp://server/file")
        host.documents[document].doc_type = "acwrite"
        assert DocumentRegistry(host).default_filter(document) is True


class TestCapture:
    """Test snapshotting documents."""

    def test_snapshot(self, host):
        add_files(host)
        document = host.open_document(A)
        host.set_cursor(host.current_window(), 3, 2)
        host.documents[document].options["filetype"] = "text"
        record = DocumentRegistry(host, DEFAULT_OPTIONS).snapshot(document)
        assert record.name == A
        assert record.loaded is True
        assert record.last_pos == Position(line=3, column=2)
        assert record.options["filetype"] == "text"
        assert record.options["buflisted"] is True
        assert "scrollbind" not in record.options

    def test_capture_all_in_host_order(self, host):
        add_files(host)
        for name in (B, A):
            host.add_document(name)
        registry = DocumentRegistry(host)
        records = registry.capture_all(registry.default_filter)
        assert [r.name for r in records] == [B, A]
        assert all(not r.loaded for r in records)

    def test_capture_all_with_include(self, host):
        add_files(host)
        keep = host.add_document(A)
        host.add_document(B)
        registry = DocumentRegistry(host)
        records = registry.capture_all(registry.default_filter, lambda d: d == keep)
        assert [r.name for r in records] == [A]


class TestMaterialize:
    """Test recreating documents on restore."""

    def test_creates_documents(self, host):
        add_files(host)
        deferred = DeferredInitQueue()
        records = [
            DocumentRecord(name=A, loaded=True, options={"filetype": "text"}),
            DocumentRecord(name=B, loaded=False),
        ]
        documents = DocumentRegistry(host).materialize_all(records, deferred)
        assert set(documents) == {A, B}
        assert host.is_loaded(documents[A]) is True
        assert host.is_loaded(documents[B]) is False
        assert host.get_option("filetype", host.option_scope("filetype"), documents[A]) == "text"

    def test_only_loaded_documents_deferred(self, host):
        add_files(host)
        deferred = DeferredInitQueue()
        records = [DocumentRecord(name=A, loaded=True), DocumentRecord(name=B)]
        DocumentRegistry(host).materialize_all(records, deferred)
        assert deferred.pending == [A]

    def test_reuses_existing_document(self, host):
        add_files(host)
        existing = host.add_document(A)
        documents = DocumentRegistry(host).materialize_all(
            [DocumentRecord(name=A)], DeferredInitQueue()
        )
        assert documents[A] == existing

    def test_unavailable_document_skipped(self, host, caplog):
        add_files(host)
        host.unavailable.add(C)
        records = [DocumentRecord(name=C, loaded=True), DocumentRecord(name=A)]
        with caplog.at_level(logging.WARNING, logger="workspace_sessions.registry"):
            documents = DocumentRegistry(host).materialize_all(records, DeferredInitQueue())
        assert list(documents) == [A]
        assert host.messages[-1][0] == logging.WARNING
        assert host.messages[-1][1].startswith(f"Could not restore {C}")
        assert "Skipping document" in caplog.text

    def test_unnamed_record_skipped(self, host):
        documents = DocumentRegistry(host).materialize_all(
            [DocumentRecord(name="")], DeferredInitQueue()
        )
        assert documents == {}


class TestDeferredInitialization:
    """Test the initializer run when a restored document is first shown."""

    def test_positions_cursor_and_edits(self, host):
        add_files(host)
        deferred = DeferredInitQueue()
        record = DocumentRecord(name=A, loaded=True, last_pos=Position(line=2, column=9))
        documents = DocumentRegistry(host).materialize_all([record], deferred)
        window = host.current_window()
        host.set_window_document(window, documents[A])

        assert deferred.fire(A, window) is True
        assert host.get_cursor(window) == (2, 3)
        assert host.documents[documents[A]].edit_count == 1
        assert host.documents[documents[A]].options["filetype"] == "text"

    def test_keeps_cursor_placed_by_layout(self, host):
        add_files(host)
        deferred = DeferredInitQueue()
        record = DocumentRecord(name=A, loaded=True, last_pos=Position(line=2, column=0))
        documents = DocumentRegistry(host).materialize_all([record], deferred)
        window = host.current_window()
        host.set_window_document(window, documents[A])
        host.set_cursor(window, 3, 1)

        deferred.fire(A, window)
        assert host.get_cursor(window) == (3, 1)


class TestClampPosition:
    """Test clamping saved positions to document bounds."""

    def test_within_bounds(self, host):
        add_files(host)
        document = host.open_document(A)
        assert clamp_position(host, document, Position(2, 2)) == (2, 2)

    def test_past_end(self, host):
        add_files(host)
        document = host.open_document(A)
        assert clamp_position(host, document, Position(99, 99)) == (3, 4)

    def test_before_start(self, host):
        add_files(host)
        document = host.open_document(A)
        assert clamp_position(host, document, Position(0, -5)) == (1, 0)

    def test_unloaded_document(self, host):
        document = host.add_document(B)
        assert clamp_position(host, document, Position(5, 5)) == (1, 0)
