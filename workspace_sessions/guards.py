"""Scoped suppression of host notifications.

Capture and restore run with the host's UI events and messages silenced so
that document hooks do not fire mid-restore and bulk document creation does
not prompt the user. The previous filter values are restored on every exit
path.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from .ports import SUPPRESS_ALL_EVENTS, SUPPRESS_ALL_MESSAGES

if TYPE_CHECKING:
    from .ports import WorkspaceHost

logger = logging.getLogger(__name__)


@contextmanager
def suppress_notifications(
    host: WorkspaceHost, *, messages: bool = False
) -> Iterator[None]:
    """Silence host events (and optionally messages) for the enclosed block.

    Args:
        host: The editor host.
        messages: Also suppress messages and interactive prompts.
    """
    previous_events = host.get_event_filter()
    previous_messages = host.get_message_filter() if messages else None
    host.set_event_filter(SUPPRESS_ALL_EVENTS)
    if messages:
        host.set_message_filter(SUPPRESS_ALL_MESSAGES)
    logger.debug("Host notifications suppressed (previous=%r)", previous_events)
    try:
        yield
    finally:
        host.set_event_filter(previous_events)
        if previous_messages is not None:
            host.set_message_filter(previous_messages)
        logger.debug("Host notifications restored")
