"""Layout codec: live window trees to layout trees and back.

Capture walks the host's nested window description and produces a fresh
``Split``/``Leaf`` tree holding only copied values. Restore rebuilds an
equivalent window tree in the current tab, scaling every recorded extent by
the ratio between the current and the captured display geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from .exceptions import HostError, LayoutFormatError
from .models import (
    UNSUPPORTED_DOCUMENT,
    Geometry,
    LayoutNode,
    Leaf,
    Orientation,
    Position,
    Split,
)
from .options import restore_options, save_options
from .ports import OptionScope
from .registry import clamp_position

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .ports import Document, EditorHost, HostLayout, Tab, Window

logger = logging.getLogger(__name__)

# Host split markers and the orientation they map to
_MARKERS = {
    "row": Orientation.HORIZONTAL,
    "col": Orientation.VERTICAL,
}
_LEAF_MARKER = "leaf"


@dataclass(frozen=True)
class Scale:
    """Ratios between the current and the captured display geometry."""

    width: float = 1.0
    height: float = 1.0

    @classmethod
    def between(cls, captured: Geometry, current: tuple[int, int]) -> Scale:
        """Compute the scale from a captured geometry to the current display."""
        width, height = current
        return cls(
            width=width / captured.width if captured.width else 1.0,
            height=height / captured.height if captured.height else 1.0,
        )

    def ratio(self, orientation: Orientation) -> float:
        """Ratio for extents along a split axis."""
        if orientation is Orientation.HORIZONTAL:
            return self.width
        return self.height

    def apply(self, size: int, orientation: Orientation) -> int:
        return max(1, round(size * self.ratio(orientation)))


def _unpack(description: HostLayout) -> tuple[str, Any]:
    try:
        marker, payload = description
    except (TypeError, ValueError) as e:
        raise LayoutFormatError(node=description, cause=e) from e
    if marker != _LEAF_MARKER and marker not in _MARKERS:
        raise LayoutFormatError(f"Unrecognized layout marker '{marker}'", node=description)
    return marker, payload


class LayoutCodec:
    """Converts between host window trees and ``LayoutNode`` trees."""

    def __init__(
        self,
        host: EditorHost,
        buffer_filter: Callable[[Document], bool],
        option_names: Iterable[str] = (),
    ) -> None:
        self.host = host
        self.buffer_filter = buffer_filter
        self.option_names = list(option_names)

    # -------------------------------------------------------------------------
    # Capture
    # -------------------------------------------------------------------------

    def capture(self, tab: Tab, current_window: Window) -> LayoutNode:
        """Snapshot the window tree of a tab.

        Args:
            tab: Tab to capture.
            current_window: Focused window; its leaf is marked current.

        Returns:
            A new layout tree.

        Raises:
            LayoutFormatError: If the host description has an unknown shape.
        """
        return self._capture_node(self.host.tab_layout(tab), current_window)

    def _capture_node(self, description: HostLayout, current_window: Window) -> LayoutNode:
        marker, payload = _unpack(description)
        if marker == _LEAF_MARKER:
            return self._capture_leaf(payload, current_window)

        orientation = _MARKERS[marker]
        if not payload:
            raise LayoutFormatError("Split without children", node=description)
        return Split(
            orientation=orientation,
            children=[self._capture_node(child, current_window) for child in payload],
            sizes=[self._extent(child, orientation) for child in payload],
        )

    def _capture_leaf(self, window: Window, current_window: Window) -> Leaf:
        document = self.host.window_document(window)
        supported = bool(self.buffer_filter(document))
        name = self.host.document_name(document) if supported else UNSUPPORTED_DOCUMENT
        line, column = self.host.get_cursor(window)
        return Leaf(
            document=name,
            cursor=Position(line=line, column=column),
            # Focus is not restored onto a placeholder window
            current=supported and window == current_window,
            options=save_options(self.host, self.option_names, OptionScope.WINDOW, window),
        )

    def _extent(self, description: HostLayout, orientation: Orientation) -> int:
        """Size of a subtree along an axis, measured from its windows."""
        marker, payload = _unpack(description)
        if marker == _LEAF_MARKER:
            width, height = self.host.window_size(payload)
            return width if orientation is Orientation.HORIZONTAL else height
        if _MARKERS[marker] is orientation:
            return sum(self._extent(child, orientation) for child in payload)
        return self._extent(payload[0], orientation)

    # -------------------------------------------------------------------------
    # Restore
    # -------------------------------------------------------------------------

    def restore(
        self,
        node: LayoutNode,
        scale: Scale,
        documents: dict[str, Document],
    ) -> Window | None:
        """Rebuild a layout tree in the current window of the current tab.

        Args:
            node: Root of the layout tree.
            scale: Geometry ratios shared by every tab of the session.
            documents: Materialized documents by name.

        Returns:
            The window whose leaf was current at capture time, if any.
        """
        return self._restore_node(node, self.host.current_window(), scale, documents)

    def _restore_node(
        self,
        node: LayoutNode,
        window: Window,
        scale: Scale,
        documents: dict[str, Document],
    ) -> Window | None:
        if isinstance(node, Leaf):
            self._restore_leaf(node, window, documents)
            return window if node.current else None

        # Each sibling is sized as soon as it is split off, so the window left
        # to split next keeps all of the remaining space. The last sibling
        # takes whatever is left.
        windows = [window]
        for size in node.sizes[:-1]:
            try:
                new_window = self.host.split_window(windows[-1], node.orientation)
            except HostError as e:
                logger.warning(
                    "Could not split window for %d of %d children: %s",
                    len(node.children) - len(windows), len(node.children), e,
                )
                break
            self.host.resize_window(
                windows[-1], node.orientation, scale.apply(size, node.orientation)
            )
            windows.append(new_window)

        current = None
        for child, child_window in zip(node.children, windows):
            found = self._restore_node(child, child_window, scale, documents)
            if current is None:
                current = found
        return current

    def _restore_leaf(
        self, leaf: Leaf, window: Window, documents: dict[str, Document]
    ) -> None:
        document = documents.get(leaf.document) if leaf.is_supported else None
        if document is None:
            if leaf.is_supported:
                logger.warning("Document %s was not restored, leaving window empty", leaf.document)
            self._show_placeholder(window)
            return

        try:
            self.host.set_window_document(window, document)
        except HostError as e:
            logger.warning("Could not show %s: %s", leaf.document, e)
            self._show_placeholder(window)
            return
        restore_options(self.host, leaf.options, OptionScope.WINDOW, window)
        line, column = clamp_position(self.host, document, leaf.cursor)
        try:
            self.host.set_cursor(window, line, column)
        except HostError as e:
            logger.debug("Cursor for %s not restored: %s", leaf.document, e)

    def _show_placeholder(self, window: Window) -> None:
        scratch = self.host.create_scratch_document()
        self.host.set_window_document(window, scratch)
