"""Core dataclasses for layouts, documents, tabs, sessions and config.

All models are designed for JSON serialization using dacite. Layout trees
are a closed tagged variant: a node is either a ``Split`` or a ``Leaf`` and
carries its ``kind`` in the serialized form.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal, Union

import dacite

from .exceptions import SessionFormatError

# Sentinel document name for windows whose document is not persisted
UNSUPPORTED_DOCUMENT = ""


# =============================================================================
# Layout Models
# =============================================================================


class Orientation(Enum):
    """Axis along which a split divides its space."""

    HORIZONTAL = "horizontal"  # Children side by side, sizes are widths
    VERTICAL = "vertical"  # Children stacked, sizes are heights


@dataclass
class Position:
    """Cursor or mark position."""

    line: int = 1  # 1-based
    column: int = 0  # 0-based


@dataclass
class Leaf:
    """A window bound to a document."""

    document: str  # Document name, or UNSUPPORTED_DOCUMENT
    cursor: Position = field(default_factory=Position)
    current: bool = False  # Focused window at capture time
    options: dict[str, Any] = field(default_factory=dict)  # Window-scoped options
    folds: list[Any] = field(default_factory=list)  # Reserved, captured empty
    kind: Literal["leaf"] = "leaf"

    @property
    def is_supported(self) -> bool:
        """Whether this leaf references a persisted document."""
        return self.document != UNSUPPORTED_DOCUMENT


@dataclass
class Split:
    """An internal node dividing space among ordered children."""

    orientation: Orientation
    children: list[LayoutNode]
    sizes: list[int]  # Extent of each child along the split axis, in cells
    kind: Literal["split"] = "split"


LayoutNode = Union[Split, Leaf]


def iter_leaves(node: LayoutNode):
    """Yield the leaves of a layout tree in child order."""
    if isinstance(node, Leaf):
        yield node
        return
    for child in node.children:
        yield from iter_leaves(child)


# =============================================================================
# Session Models
# =============================================================================


@dataclass
class DocumentRecord:
    """Saved attributes of one persisted document."""

    name: str  # Resolved path
    loaded: bool = False
    options: dict[str, Any] = field(default_factory=dict)
    last_pos: Position = field(default_factory=Position)


@dataclass
class TabRecord:
    """Saved state of one tab."""

    layout: LayoutNode
    cwd: str | None = None  # Only set when the tab has its own directory
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class Geometry:
    """Display size available to windows."""

    width: int
    height: int


@dataclass
class SessionDocument:
    """The unit of storage: one named session."""

    cwd: str
    geometry: Geometry
    tabs: list[TabRecord] = field(default_factory=list)
    documents: list[DocumentRecord] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)  # Global options
    tab_scoped: bool = False
    extensions: dict[str, Any] = field(default_factory=dict)  # name -> payload

    @property
    def referenced_documents(self) -> set[str]:
        """Names of all documents referenced by a supported leaf."""
        return {
            leaf.document
            for tab in self.tabs
            for leaf in iter_leaves(tab.layout)
            if leaf.is_supported
        }


class ResetPolicy(Enum):
    """Whether to close the existing workspace before restoring."""

    ALWAYS = "always"
    NEVER = "never"
    AUTO = "auto"  # Reset for global sessions, new tab for tab-scoped ones

    def resolve(self, tab_scoped: bool) -> bool:
        """Return True if the workspace should be reset for this session."""
        if self is ResetPolicy.AUTO:
            return not tab_scoped
        return self is ResetPolicy.ALWAYS


@dataclass
class SaveOptions:
    """Options for saving a session."""

    attach: bool = True  # Stay attached to session after saving
    notify: bool = True  # Notify on success
    dir: str | None = None  # Overrides config.dir


@dataclass
class LoadOptions:
    """Options for loading a session."""

    attach: bool = True  # Stay attached to session after loading
    reset: ResetPolicy = ResetPolicy.AUTO
    silence_errors: bool = False  # Missing session is not an error
    dir: str | None = None  # Overrides config.dir


@dataclass
class AttachmentInfo:
    """Outcome of a restore, used for attachment bookkeeping."""

    tab_scoped: bool
    reset: bool
    tab: Any = None  # Tab the session was restored into (first tab)
    current_window: Any = None


# =============================================================================
# Configuration Models
# =============================================================================

DEFAULT_OPTIONS = [
    "binary",
    "bufhidden",
    "buflisted",
    "cmdheight",
    "diff",
    "filetype",
    "modifiable",
    "previewwindow",
    "readonly",
    "scrollbind",
    "winfixheight",
    "winfixwidth",
]


@dataclass
class ExtensionConfig:
    """Per-extension configuration."""

    enable_in_tab: bool = False  # Run the extension for tab-scoped sessions
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionsConfig:
    """Complete package configuration."""

    dir: str = "session"  # Session directory name under the data dir
    load_detail: bool = True  # Include cwd details when listing sessions
    options: list[str] = field(default_factory=lambda: list(DEFAULT_OPTIONS))
    extensions: dict[str, ExtensionConfig] = field(default_factory=dict)


# =============================================================================
# Serialization Helpers
# =============================================================================

_DACITE_CONFIG = dacite.Config(cast=[Enum])


def _convert_enums(obj: object) -> object:
    """Recursively convert Enum values to their string values."""
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {k: _convert_enums(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_convert_enums(item) for item in obj]
    return obj


def model_to_dict(obj: object) -> dict:
    """Convert a dataclass model to a dictionary for JSON serialization."""
    data = asdict(obj)  # type: ignore[arg-type]
    return _convert_enums(data)  # type: ignore[return-value]


def model_from_dict(data_class: type, data: dict) -> Any:
    """Load a dataclass model from a dictionary."""
    return dacite.from_dict(data_class=data_class, data=data, config=_DACITE_CONFIG)


def validate_layout(node: LayoutNode, path: str = "layout") -> None:
    """Check split invariants of a layout tree.

    Raises:
        SessionFormatError: If a split is empty or its sizes do not match.
    """
    if isinstance(node, Leaf):
        return
    if not node.children:
        raise SessionFormatError("Split has no children", field=path)
    if len(node.sizes) != len(node.children):
        raise SessionFormatError(
            f"Split has {len(node.children)} children but {len(node.sizes)} sizes",
            field=path,
        )
    for i, child in enumerate(node.children):
        validate_layout(child, f"{path}.children[{i}]")


def validate_session_document(doc: SessionDocument) -> None:
    """Check the invariants of a session document.

    Raises:
        SessionFormatError: If the document breaks an invariant.
    """
    if not doc.tabs:
        raise SessionFormatError("Session has no tabs", field="tabs")
    if doc.tab_scoped:
        if len(doc.tabs) != 1:
            raise SessionFormatError(
                "Tab-scoped session must have exactly one tab",
                field="tabs",
                context={"tab_count": len(doc.tabs)},
            )
        if doc.options:
            raise SessionFormatError(
                "Tab-scoped session cannot carry global options", field="options"
            )
    if doc.geometry.width <= 0 or doc.geometry.height <= 0:
        raise SessionFormatError("Session geometry must be positive", field="geometry")
    for i, tab in enumerate(doc.tabs):
        validate_layout(tab.layout, f"tabs[{i}].layout")


def session_to_dict(doc: SessionDocument) -> dict:
    """Serialize a session document to a JSON-compatible dictionary."""
    return model_to_dict(doc)


def session_from_dict(data: Any) -> SessionDocument:
    """Load and validate a session document.

    Raises:
        SessionFormatError: If required fields are missing, have the wrong
            type, or the document breaks an invariant.
    """
    if not isinstance(data, dict):
        raise SessionFormatError(
            "Session document must be an object",
            context={"type": type(data).__name__},
        )
    try:
        doc = dacite.from_dict(data_class=SessionDocument, data=data, config=_DACITE_CONFIG)
    except (dacite.DaciteError, ValueError) as e:
        raise SessionFormatError(f"Session schema validation failed: {e}", cause=e) from e
    validate_session_document(doc)
    return doc
