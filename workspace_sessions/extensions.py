"""Extension registry.

Extensions persist extra state alongside a session. An extension is any
object with optional ``on_save() -> payload``, ``on_load(payload)`` and
``config(options)`` callables; payloads are opaque to the session core and
must be JSON-compatible.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class ExtensionRegistry:
    """Maps extension names to extension objects."""

    def __init__(self) -> None:
        self._extensions: dict[str, Any] = {}
        self._warned: set[str] = set()

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def register(self, name: str, extension: Any) -> None:
        """Register (or replace) an extension under a name."""
        self._extensions[name] = extension
        self._warned.discard(name)
        logger.debug("Registered extension %s", name)

    def unregister(self, name: str) -> None:
        self._extensions.pop(name, None)

    def get(self, name: str) -> Any | None:
        """Return a registered extension, warning once about missing ones."""
        extension = self._extensions.get(name)
        if extension is None and name not in self._warned:
            self._warned.add(name)
            logger.warning("Missing extension: %s", name)
        return extension

    def configure(self, name: str, options: dict[str, Any]) -> None:
        """Pass configuration options to an extension's ``config`` callback."""
        extension = self.get(name)
        configure = getattr(extension, "config", None)
        if configure is not None:
            configure(options)

    @staticmethod
    def callback(extension: Any, name: str) -> Any | None:
        """Return a named callback of an extension, or None."""
        cb = getattr(extension, name, None)
        return cb if callable(cb) else None
