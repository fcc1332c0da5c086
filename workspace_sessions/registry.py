"""Document registry.

Decides which open documents are persisted, snapshots them into
``DocumentRecord`` values, and recreates them on restore before any layout
is rebuilt.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from .exceptions import DocumentMaterializationError, HostError, record_error
from .logging_config import log_exception
from .models import DocumentRecord, Position
from .options import restore_options, save_options
from .ports import OptionScope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .deferred import DeferredInitQueue
    from .ports import Document, EditorHost, Window

logger = logging.getLogger(__name__)

BufferFilter = Callable[[Any], bool]

# Document types that are persisted besides ordinary files
_FILE_TYPES = ("", "acwrite")
_HELP_TYPE = "help"


def clamp_position(host: EditorHost, document: Document, position: Position) -> tuple[int, int]:
    """Clamp a saved position to the current bounds of a document."""
    line_count = max(host.line_count(document), 1)
    line = min(max(position.line, 1), line_count)
    length = host.line_length(document, line)
    column = min(max(position.column, 0), max(length - 1, 0))
    return line, column


class DocumentRegistry:
    """Snapshots and materializes the persisted document set."""

    def __init__(self, host: EditorHost, option_names: Iterable[str] = ()) -> None:
        self.host = host
        self.option_names = list(option_names)

    def default_filter(self, document: Document) -> bool:
        """Default buffer filter.

        Keeps help documents and listed, named ordinary files.
        """
        doc_type = self.host.document_type(document)
        if doc_type == _HELP_TYPE:
            return True
        if doc_type not in _FILE_TYPES:
            return False
        if self.host.document_name(document) == "":
            return False
        return self.host.is_listed(document)

    def snapshot(self, document: Document) -> DocumentRecord:
        """Copy the persisted attributes of one document."""
        line, column = self.host.get_mark(document)
        return DocumentRecord(
            name=self.host.document_name(document),
            loaded=self.host.is_loaded(document),
            options=save_options(
                self.host, self.option_names, OptionScope.DOCUMENT, document
            ),
            last_pos=Position(line=line, column=column),
        )

    def capture_all(
        self,
        buffer_filter: BufferFilter,
        include: BufferFilter | None = None,
    ) -> list[DocumentRecord]:
        """Snapshot every document accepted by the filters.

        Args:
            buffer_filter: Persistence eligibility predicate.
            include: Optional extra predicate (used to restrict tab-scoped
                sessions to the documents of one tab).

        Returns:
            Records in host document order.
        """
        records = []
        for document in self.host.list_documents():
            if not buffer_filter(document):
                continue
            if include is not None and not include(document):
                continue
            records.append(self.snapshot(document))
        logger.debug("Captured %d documents", len(records))
        return records

    def materialize_all(
        self,
        records: Iterable[DocumentRecord],
        deferred: DeferredInitQueue,
    ) -> dict[str, Document]:
        """Create or find the document of every record.

        Loaded documents are read now; their full initialization is deferred
        to their first display. Documents that cannot be opened are skipped.

        Returns:
            Mapping of document name to live document handle.
        """
        documents: dict[str, Document] = {}
        for record in records:
            if not record.name:
                logger.debug("Skipping unnamed document record")
                continue
            try:
                documents[record.name] = self._materialize(record, deferred)
            except HostError as e:
                error = DocumentMaterializationError(
                    f"Could not open {record.name}", document=record.name, cause=e
                )
                record_error(error)
                log_exception(logger, error, "Skipping document", level=logging.WARNING,
                              include_traceback=False)
                self.host.notify(f"Could not restore {record.name}: {e.message}", logging.WARNING)
        return documents

    def _materialize(self, record: DocumentRecord, deferred: DeferredInitQueue) -> Document:
        document = self.host.add_document(record.name)
        if record.loaded:
            self.host.load_document(document)
            deferred.schedule(record.name, self._make_initializer(document, record))
        restore_options(self.host, record.options, OptionScope.DOCUMENT, document)
        return document

    def _make_initializer(
        self, document: Document, record: DocumentRecord
    ) -> Callable[[Window], None]:
        host = self.host

        def initialize(window: Window) -> None:
            # A window still at the top of the document was not placed by a leaf
            if host.get_cursor(window) == (1, 0):
                line, column = clamp_position(host, document, record.last_pos)
                host.set_cursor(window, line, column)
            host.edit_document(document)

        return initialize
