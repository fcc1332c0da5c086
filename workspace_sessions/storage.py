"""Session file storage.

One JSON file per named session. Reading distinguishes a missing file
(``None``), an unreadable file (``SessionLoadError``) and a malformed
document (``SessionFormatError``).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import SESSION_EXTENSION
from .exceptions import (
    SessionFormatError,
    SessionLoadError,
    SessionSaveError,
    record_error,
)
from .models import SessionDocument, session_from_dict, session_to_dict

logger = logging.getLogger(__name__)


def list_sessions(session_dir: Path) -> list[str]:
    """Return the names of the sessions stored in a directory, sorted."""
    if not session_dir.is_dir():
        return []
    return sorted(
        entry.name[: -len(SESSION_EXTENSION)]
        for entry in session_dir.iterdir()
        if entry.is_file() and entry.name.endswith(SESSION_EXTENSION)
        and len(entry.name) > len(SESSION_EXTENSION)
    )


def read_session(path: Path) -> SessionDocument | None:
    """
    Read a session file.

    Returns:
        The session document, or None if the file does not exist.

    Raises:
        SessionLoadError: If the file cannot be read.
        SessionFormatError: If the file is not a valid session document.
    """
    if not path.exists():
        logger.debug("No session file at %s", path)
        return None

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in session file: %s", e)
        record_error(e)
        raise SessionFormatError(
            f"Invalid JSON in session file at line {e.lineno}",
            file_path=str(path),
            context={"line": e.lineno, "column": e.colno},
            cause=e,
        ) from e
    except OSError as e:
        logger.error("Failed to read session file: %s", e)
        record_error(e)
        raise SessionLoadError(file_path=str(path), cause=e) from e

    try:
        return session_from_dict(data)
    except SessionFormatError as e:
        e.context.setdefault("file_path", str(path))
        record_error(e)
        raise


def write_session(path: Path, doc: SessionDocument) -> None:
    """
    Write a session file, creating its directory if needed.

    Raises:
        SessionSaveError: If the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        data = session_to_dict(doc)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        logger.debug("Wrote session file %s", path)
    except OSError as e:
        logger.error("Failed to write session file: %s", e)
        record_error(e)
        raise SessionSaveError(file_path=str(path), cause=e) from e
    except (TypeError, ValueError) as e:
        logger.error("Failed to serialize session to JSON: %s", e)
        record_error(e)
        raise SessionSaveError(
            "Failed to serialize session to JSON",
            file_path=str(path),
            cause=e,
        ) from e


def delete_session(path: Path) -> bool:
    """Delete a session file.

    Returns:
        True if the file was deleted, False if it did not exist.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Deleted session file %s", path)
    return True


def shorten_path(path: str | None) -> str:
    """Abbreviate the home directory in a path with ``~``."""
    if not path:
        return ""
    home = str(Path.home())
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home):]
    return path


def describe_session(name: str, doc: SessionDocument | None) -> str:
    """Return a one-line label for a session, with its working directory."""
    if doc is None:
        return name
    if doc.tab_scoped:
        return f"{name} (tab) [{shorten_path(doc.tabs[0].cwd)}]"
    return f"{name} [{shorten_path(doc.cwd)}]"
