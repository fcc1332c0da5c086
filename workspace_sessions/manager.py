"""Session manager.

Holds the session state that would otherwise be process-wide: the attached
global session, the sessions attached to individual tabs, the directory each
attached session was saved to, and whether a load is in progress. Names,
files and hooks are handled here; the capture and restore work itself is
delegated to ``SessionStore``.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable

from .config import get_session_dir, get_session_file
from .deferred import DeferredInitQueue
from .exceptions import (
    NotConfiguredError,
    SessionFormatError,
    SessionLoadError,
    SessionNameRequiredError,
    SessionNotFoundError,
)
from .extensions import ExtensionRegistry
from .hooks import POST_LOAD, POST_SAVE, PRE_LOAD, PRE_SAVE, HookCallback, HookRegistry
from .models import (
    ExtensionConfig,
    LoadOptions,
    SaveOptions,
    SessionDocument,
    SessionsConfig,
)
from .storage import delete_session, describe_session, list_sessions, read_session, write_session
from .store import SessionStore, TabBufferFilter

if TYPE_CHECKING:
    from .ports import Document, EditorHost, Tab, Window

logger = logging.getLogger(__name__)


class SessionManager:
    """Named sessions for one editor host.

    Example:
        manager = SessionManager(host)
        manager.setup(load_config())
        manager.save("work")
        ...
        manager.load("work")
    """

    def __init__(
        self,
        host: EditorHost,
        config: SessionsConfig | None = None,
        *,
        buffer_filter: Callable[[Document], bool] | None = None,
        tab_buffer_filter: TabBufferFilter | None = None,
    ) -> None:
        self.host = host
        self.config = config or SessionsConfig()
        self.has_setup = config is not None
        self.buffer_filter = buffer_filter
        self.tab_buffer_filter = tab_buffer_filter
        self.extensions = ExtensionRegistry()
        self.hooks = HookRegistry()
        self.deferred = DeferredInitQueue()

        self.current_session: str | None = None
        self.tab_sessions: dict[Tab, str] = {}
        self.session_configs: dict[str, SaveOptions] = {}
        self._is_loading = False

        host.add_display_listener(self._on_display)

    # -------------------------------------------------------------------------
    # Setup
    # -------------------------------------------------------------------------

    def setup(self, config: SessionsConfig) -> None:
        """Install a configuration and configure its extensions."""
        self.config = config
        self.has_setup = True
        for name, ext_config in config.extensions.items():
            self.extensions.configure(name, ext_config.options)

    def register_extension(self, name: str, extension: Any) -> None:
        """Make an extension object available under a name."""
        self.extensions.register(name, extension)

    def load_extension(self, name: str, config: ExtensionConfig | None = None) -> None:
        """Enable an extension after setup().

        Raises:
            NotConfiguredError: If setup() has not been called.
        """
        if not self.has_setup:
            raise NotConfiguredError("load_extension")
        config = config or ExtensionConfig()
        self.config.extensions[name] = config
        self.extensions.configure(name, config.options)

    def _store(self) -> SessionStore:
        return SessionStore(
            self.host,
            self.config,
            self.extensions,
            self.deferred,
            buffer_filter=self.buffer_filter,
            tab_buffer_filter=self.tab_buffer_filter,
        )

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def add_hook(self, name: str, callback: HookCallback) -> None:
        """Run a callback at "pre_save", "post_save", "pre_load" or "post_load".

        Raises:
            UnknownHookError: For any other hook name.
        """
        self.hooks.add(name, callback)

    def remove_hook(self, name: str, callback: HookCallback) -> None:
        self.hooks.remove(name, callback)

    # -------------------------------------------------------------------------
    # Attachment state
    # -------------------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        """True while a session is being loaded."""
        return self._is_loading

    def get_current(self) -> str | None:
        """Name of the session attached to the current tab, or the global one."""
        return self.tab_sessions.get(self.host.current_tab()) or self.current_session

    def detach(self) -> None:
        """Detach from the current session."""
        self.current_session = None
        self.tab_sessions.pop(self.host.current_tab(), None)

    def _remove_tab_session(self, name: str) -> None:
        for tab, session_name in list(self.tab_sessions.items()):
            if session_name == name:
                del self.tab_sessions[tab]
                break

    # -------------------------------------------------------------------------
    # Listing and deletion
    # -------------------------------------------------------------------------

    def list(self, dir: str | None = None) -> list[str]:
        """List the names of all saved sessions."""
        return list_sessions(get_session_dir(dir, self.config))

    def list_detailed(self, dir: str | None = None) -> list[tuple[str, str]]:
        """List saved sessions with a display label.

        With ``config.load_detail`` the label includes the session's working
        directory; unreadable sessions keep their bare name.
        """
        result = []
        for name in self.list(dir):
            label = name
            if self.config.load_detail:
                try:
                    label = describe_session(name, read_session(get_session_file(name, dir, self.config)))
                except (SessionFormatError, SessionLoadError) as e:
                    logger.debug("Could not describe session %s: %s", name, e)
            result.append((name, label))
        return result

    def delete(self, name: str, dir: str | None = None) -> None:
        """Delete a saved session.

        Raises:
            SessionNotFoundError: If no such session exists.
        """
        if not name:
            raise SessionNameRequiredError("delete")
        path = get_session_file(name, dir, self.config)
        if not delete_session(path):
            raise SessionNotFoundError(name, file_path=str(path))
        if self.current_session == name:
            self.current_session = None
        self._remove_tab_session(name)
        logger.info("Deleted session %s", name)

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    def _save(self, name: str, options: SaveOptions, target_tab: Tab | None = None) -> SessionDocument:
        path = get_session_file(name, options.dir, self.config)
        self.hooks.dispatch(PRE_SAVE, name, options, target_tab)
        doc = self._store().capture_session(target_tab)
        write_session(path, doc)
        if options.notify:
            self.host.notify(f"Saved session {name}")
        if options.attach:
            self.session_configs[name] = SaveOptions(dir=options.dir)
        logger.info("Saved session %s to %s", name, path)
        self.hooks.dispatch(POST_SAVE, name, options, target_tab)
        return doc

    def save(self, name: str | None = None, options: SaveOptions | None = None) -> SessionDocument:
        """Save the whole workspace.

        Args:
            name: Session name; defaults to the attached global session.
            options: Save options.

        Raises:
            SessionNameRequiredError: If no name is given or attached.
        """
        options = options or SaveOptions()
        name = name or self.current_session
        if not name:
            raise SessionNameRequiredError("save")
        doc = self._save(name, options)
        self.tab_sessions = {}
        self.current_session = name if options.attach else None
        return doc

    def save_tab(self, name: str | None = None, options: SaveOptions | None = None) -> SessionDocument:
        """Save the current tab as a tab-scoped session.

        Args:
            name: Session name; defaults to the session attached to this tab.
            options: Save options.

        Raises:
            SessionNameRequiredError: If no name is given or attached.
        """
        options = options or SaveOptions()
        tab = self.host.current_tab()
        name = name or self.tab_sessions.get(tab)
        if not name:
            raise SessionNameRequiredError("save_tab")
        doc = self._save(name, options, tab)
        self.current_session = None
        self._remove_tab_session(name)
        if options.attach:
            self.tab_sessions[tab] = name
        else:
            self.tab_sessions.pop(tab, None)
        return doc

    def save_all(self, notify: bool = True) -> None:
        """Save every attached session (global, or each tab-scoped one)."""
        if self.current_session:
            name = self.current_session
            stored = self.session_configs.get(name, SaveOptions())
            self._save(name, replace(stored, notify=notify))
            return

        for tab in [t for t in self.tab_sessions if not self.host.tab_is_valid(t)]:
            del self.tab_sessions[tab]
        for tab, name in list(self.tab_sessions.items()):
            stored = self.session_configs.get(name, SaveOptions())
            self._save(name, replace(stored, notify=notify), tab)

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def load(self, name: str, options: LoadOptions | None = None) -> SessionDocument | None:
        """Load a saved session.

        Args:
            name: Session name.
            options: Load options.

        Returns:
            The loaded session document, or None if it does not exist and
            ``silence_errors`` is set.

        Raises:
            SessionNotFoundError: If the session does not exist.
            SessionFormatError: If the session file is malformed.
        """
        options = options or LoadOptions()
        if not name:
            raise SessionNameRequiredError("load")
        path = get_session_file(name, options.dir, self.config)
        doc = read_session(path)
        if doc is None:
            if not options.silence_errors:
                raise SessionNotFoundError(name, file_path=str(path))
            logger.debug("Session %s not found, nothing to load", name)
            return None

        self.hooks.dispatch(PRE_LOAD, name, options)
        self._is_loading = True
        try:
            info = self._store().restore_session(doc, options.reset)
            self.current_session = None
            if info.reset:
                self.tab_sessions = {}
            self._remove_tab_session(name)
            if options.attach:
                if doc.tab_scoped:
                    self.tab_sessions[self.host.current_tab()] = name
                else:
                    self.current_session = name
                self.session_configs[name] = SaveOptions(dir=options.dir)
        finally:
            self._is_loading = False
        logger.info("Loaded session %s", name)
        self.hooks.dispatch(POST_LOAD, name, options)

        # Finish initializing the document left on screen
        window = self.host.current_window()
        self._on_display(self.host.window_document(window), window)
        return doc

    def _on_display(self, document: Document, window: Window) -> None:
        name = self.host.document_name(document)
        if name:
            self.deferred.fire(name, window)
