"""Deferred document initialization.

Restored documents are loaded but not fully initialized (type detection,
highlighting) until they are first displayed. Each document gets at most one
pending callback, keyed by its identifier; the host's display dispatch drains
the queue, the session core only schedules.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .logging_config import log_exception

logger = logging.getLogger(__name__)

InitCallback = Callable[[Any], None]


class DeferredInitQueue:
    """One-shot initialization callbacks keyed by document identifier."""

    def __init__(self) -> None:
        self._pending: dict[str, InitCallback] = {}

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    @property
    def pending(self) -> list[str]:
        """Identifiers that still wait for their first display."""
        return list(self._pending)

    def schedule(self, identifier: str, callback: InitCallback) -> None:
        """Register the callback for a document, replacing any earlier one."""
        if identifier in self._pending:
            logger.debug("Replacing pending initialization for %s", identifier)
        self._pending[identifier] = callback

    def fire(self, identifier: str, window: Any) -> bool:
        """Run and discard the callback of a document, if any.

        Args:
            identifier: Document identifier.
            window: Window the document is being displayed in.

        Returns:
            True if a callback ran.
        """
        callback = self._pending.pop(identifier, None)
        if callback is None:
            return False
        try:
            callback(window)
        except Exception as e:
            log_exception(
                logger, e, f"Deferred initialization of {identifier} failed",
                level=logging.WARNING,
            )
        return True

    def discard(self, identifier: str) -> None:
        self._pending.pop(identifier, None)

    def clear(self) -> None:
        self._pending.clear()
