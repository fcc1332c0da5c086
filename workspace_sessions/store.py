"""Session store: assembling and restoring whole session documents.

Capture order: geometry and working directory, global options, one layout
per target tab, the document list, then extension payloads. Restore order:
reset or clean tab, global options and directory, documents, tab layouts,
focus, then extension payloads. Both directions run with host notifications
suppressed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from .deferred import DeferredInitQueue
from .exceptions import ExtensionError, HostError, record_error
from .extensions import ExtensionRegistry
from .guards import suppress_notifications
from .layout import LayoutCodec, Scale
from .logging_config import log_exception
from .models import (
    AttachmentInfo,
    Geometry,
    ResetPolicy,
    SessionDocument,
    SessionsConfig,
    TabRecord,
    iter_leaves,
    validate_session_document,
)
from .options import restore_options, save_options
from .ports import OptionScope
from .registry import DocumentRegistry

if TYPE_CHECKING:
    from .ports import Document, EditorHost, Tab

logger = logging.getLogger(__name__)

TabBufferFilter = Callable[[Any, Any], bool]


def _reject_all(tab: Tab, document: Document) -> bool:
    return False


class SessionStore:
    """Captures and restores complete ``SessionDocument``s."""

    def __init__(
        self,
        host: EditorHost,
        config: SessionsConfig,
        extensions: ExtensionRegistry,
        deferred: DeferredInitQueue,
        buffer_filter: Callable[[Document], bool] | None = None,
        tab_buffer_filter: TabBufferFilter | None = None,
    ) -> None:
        self.host = host
        self.config = config
        self.extensions = extensions
        self.deferred = deferred
        self.registry = DocumentRegistry(host, config.options)
        self.buffer_filter = buffer_filter or self.registry.default_filter
        self.tab_buffer_filter = tab_buffer_filter or _reject_all

    def _codec(self) -> LayoutCodec:
        return LayoutCodec(self.host, self.buffer_filter, self.config.options)

    # -------------------------------------------------------------------------
    # Capture
    # -------------------------------------------------------------------------

    def capture_session(self, target_tab: Tab | None = None) -> SessionDocument:
        """Snapshot the workspace, or a single tab of it.

        Args:
            target_tab: Tab to capture for a tab-scoped session, or None for
                all tabs.

        Returns:
            A new session document.
        """
        with suppress_notifications(self.host):
            return self._capture(target_tab)

    def _capture(self, target_tab: Tab | None) -> SessionDocument:
        host = self.host
        tab_scoped = target_tab is not None
        width, height = host.display_size()
        doc = SessionDocument(
            cwd=host.get_cwd(),
            geometry=Geometry(width=width, height=height),
            # Global options are not meaningful for a single-tab snapshot
            options={} if tab_scoped else save_options(host, self.config.options, OptionScope.GLOBAL),
            tab_scoped=tab_scoped,
        )

        codec = self._codec()
        current_window = host.current_window()
        tabs = [target_tab] if tab_scoped else host.list_tabs()
        for tab in tabs:
            cwd = host.tab_cwd(tab)
            if cwd is None and tab_scoped:
                cwd = doc.cwd
            doc.tabs.append(
                TabRecord(
                    layout=codec.capture(tab, current_window),
                    cwd=cwd,
                    options=save_options(host, self.config.options, OptionScope.TAB, tab),
                )
            )

        include = None
        if tab_scoped:
            shown = {host.window_document(w) for w in host.tab_windows(target_tab)}

            def include(document: Document) -> bool:
                return document in shown or self.tab_buffer_filter(target_tab, document)

        doc.documents = self.registry.capture_all(self.buffer_filter, include)
        self._save_extensions(doc, tab_scoped)
        logger.info(
            "Captured %d tabs and %d documents%s",
            len(doc.tabs), len(doc.documents), " (tab-scoped)" if tab_scoped else "",
        )
        return doc

    def _save_extensions(self, doc: SessionDocument, tab_scoped: bool) -> None:
        for name, ext_config in self.config.extensions.items():
            extension = self.extensions.get(name)
            on_save = ExtensionRegistry.callback(extension, "on_save")
            if on_save is None or (tab_scoped and not ext_config.enable_in_tab):
                continue
            try:
                payload = on_save()
            except Exception as e:
                self._report_extension_failure(name, "save", e)
                continue
            if payload is not None:
                doc.extensions[name] = payload

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    def restore_session(
        self, doc: SessionDocument, reset: ResetPolicy = ResetPolicy.AUTO
    ) -> AttachmentInfo:
        """Rebuild a session document in the live workspace.

        Args:
            doc: Session to restore.
            reset: Whether to close the existing workspace first.

        Returns:
            Where the session was restored, for attachment bookkeeping.

        Raises:
            SessionFormatError: If the document breaks a model invariant.
        """
        validate_session_document(doc)
        with suppress_notifications(self.host, messages=True):
            return self._restore(doc, reset.resolve(doc.tab_scoped))

    def _restore(self, doc: SessionDocument, reset: bool) -> AttachmentInfo:
        host = self.host
        if reset:
            self._close_everything()
        else:
            self._open_clean_tab()

        if not doc.tab_scoped:
            restore_options(host, doc.options, OptionScope.GLOBAL)
            host.set_cwd(doc.cwd)

        documents = self.registry.materialize_all(doc.documents, self.deferred)
        scale = Scale.between(doc.geometry, host.display_size())
        logger.debug("Restoring with scale %s", scale)

        codec = self._codec()
        first_tab = None
        current_window = None
        for i, tab_record in enumerate(doc.tabs):
            if i > 0:
                host.new_tab()
                self._mark_disposable(host.window_document(host.current_window()))
            tab = host.current_tab()
            if first_tab is None:
                first_tab = tab
            if tab_record.cwd:
                host.set_tab_cwd(tab, tab_record.cwd)
            window = codec.restore(tab_record.layout, scale, documents)
            if window is not None:
                current_window = window
            restore_options(host, tab_record.options, OptionScope.TAB, tab)

        # None when the session was saved from a window with an unsupported document
        if current_window is not None:
            host.set_current_window(current_window)

        self._load_extensions(doc)
        missing = doc.referenced_documents - documents.keys()
        logger.info(
            "Restored %d tabs and %d documents (%d missing)",
            len(doc.tabs), len(documents), len(missing),
        )
        return AttachmentInfo(
            tab_scoped=doc.tab_scoped,
            reset=reset,
            tab=host.current_tab() if doc.tab_scoped else first_tab,
            current_window=current_window,
        )

    def _load_extensions(self, doc: SessionDocument) -> None:
        for name in self.config.extensions:
            if name not in doc.extensions:
                continue
            extension = self.extensions.get(name)
            on_load = ExtensionRegistry.callback(extension, "on_load")
            if on_load is None:
                continue
            try:
                on_load(doc.extensions[name])
            except Exception as e:
                self._report_extension_failure(name, "load", e)

    def _report_extension_failure(self, name: str, phase: str, exc: Exception) -> None:
        error = ExtensionError(f"Extension {name} {phase} error: {exc}", extension=name,
                               phase=phase, cause=exc)
        record_error(error)
        log_exception(logger, exc, f"Extension {name} {phase} error", level=logging.WARNING)
        self.host.notify(f"Extension {name} {phase} error: {exc}", logging.ERROR)

    def _mark_disposable(self, document: Document) -> None:
        """Make a placeholder document disappear once it is hidden."""
        try:
            self.host.set_option("buflisted", False, OptionScope.DOCUMENT, document)
            self.host.set_option("bufhidden", "wipe", OptionScope.DOCUMENT, document)
        except HostError as e:
            logger.debug("Could not mark placeholder document disposable: %s", e)

    def _close_everything(self) -> None:
        """Close all tabs, windows and listed documents down to one scratch window."""
        host = self.host
        scratch = host.create_scratch_document()
        self._mark_disposable(scratch)
        host.set_window_document(host.current_window(), scratch)
        for document in host.list_documents():
            if document != scratch and host.is_listed(document):
                host.delete_document(document)
        host.close_other_tabs()
        host.close_other_windows()
        self.deferred.clear()

    def _open_clean_tab(self) -> None:
        """Reuse the current tab if it is one empty scratch window, else open a tab."""
        host = self.host
        if len(host.tab_windows(host.current_tab())) == 1:
            document = host.window_document(host.current_window())
            if host.document_name(document) == "" and self._is_empty(document):
                self._mark_disposable(document)
                return
        host.new_tab()
        self._mark_disposable(host.window_document(host.current_window()))

    def _is_empty(self, document: Document) -> bool:
        return self.host.line_count(document) <= 1 and self.host.line_length(document, 1) == 0


def documents_in_layout(doc: SessionDocument) -> list[str]:
    """Names of the documents shown by the session's leaves, in layout order."""
    names: list[str] = []
    for tab in doc.tabs:
        for leaf in iter_leaves(tab.layout):
            if leaf.is_supported and leaf.document not in names:
                names.append(leaf.document)
    return names
