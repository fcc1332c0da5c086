"""Snapshot and restore of editor options per scope.

Only the option names listed in the configuration are persisted. Each name
is saved in the scope the host reports for it, so the same configured list
feeds the global, tab, document and window snapshots.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .exceptions import HostError
from .ports import OptionScope

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports import WorkspaceHost

logger = logging.getLogger(__name__)


def save_options(
    host: WorkspaceHost,
    names: Iterable[str],
    scope: OptionScope,
    handle: Any = None,
) -> dict[str, Any]:
    """Read the configured options that live in ``scope``.

    Args:
        host: The editor host.
        names: Configured option names.
        scope: Scope to snapshot.
        handle: Tab, document or window handle for non-global scopes.

    Returns:
        Mapping of option name to value, in configured order.
    """
    saved: dict[str, Any] = {}
    for name in names:
        if host.option_scope(name) is not scope:
            continue
        saved[name] = host.get_option(name, scope, handle)
    return saved


def restore_options(
    host: WorkspaceHost,
    options: dict[str, Any],
    scope: OptionScope,
    handle: Any = None,
) -> list[str]:
    """Apply saved options, skipping the ones the host rejects.

    Returns:
        Names of the options that could not be applied.
    """
    failed: list[str] = []
    for name, value in options.items():
        try:
            host.set_option(name, value, scope, handle)
        except HostError as e:
            logger.warning("Could not restore %s option %s=%r: %s", scope.value, name, value, e)
            failed.append(name)
    return failed
