"""Hook points fired around save and load."""

from __future__ import annotations

import logging
from typing import Any, Callable

from .exceptions import UnknownHookError

logger = logging.getLogger(__name__)

PRE_SAVE = "pre_save"
POST_SAVE = "post_save"
PRE_LOAD = "pre_load"
POST_LOAD = "post_load"

HOOK_NAMES = (PRE_SAVE, POST_SAVE, PRE_LOAD, POST_LOAD)

HookCallback = Callable[..., Any]


class HookRegistry:
    """Ordered callback lists for the four hook points.

    Callbacks run in registration order. Save hooks receive
    ``(name, options, target_tab)``, load hooks ``(name, options)``.
    Errors raised by callbacks propagate to the caller.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[HookCallback]] = {name: [] for name in HOOK_NAMES}

    def _callbacks(self, hook: str) -> list[HookCallback]:
        try:
            return self._hooks[hook]
        except KeyError:
            raise UnknownHookError(hook) from None

    def add(self, hook: str, callback: HookCallback) -> None:
        self._callbacks(hook).append(callback)

    def remove(self, hook: str, callback: HookCallback) -> None:
        """Remove the first registration of a callback, if present."""
        callbacks = self._callbacks(hook)
        if callback in callbacks:
            callbacks.remove(callback)

    def dispatch(self, hook: str, *args: Any) -> None:
        callbacks = list(self._callbacks(hook))
        logger.debug("Dispatching %s to %d callbacks", hook, len(callbacks))
        for callback in callbacks:
            callback(*args)
