"""Entry point for python -m workspace_sessions.

Headless commands over saved session files. Capturing and restoring a live
workspace needs an editor host and goes through ``SessionManager``.

Usage:
    python -m workspace_sessions list
    python -m workspace_sessions list --dir /tmp/sessions --json
    python -m workspace_sessions show work
    python -m workspace_sessions delete work
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from workspace_sessions.config import get_session_dir, get_session_file, load_config
from workspace_sessions.exceptions import (
    SessionFormatError,
    SessionLoadError,
    SessionNotFoundError,
    WorkspaceSessionsError,
)
from workspace_sessions.models import session_to_dict
from workspace_sessions.storage import (
    delete_session,
    describe_session,
    list_sessions,
    read_session,
)
from workspace_sessions.store import documents_in_layout


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments."""
    from workspace_sessions.logging_config import enable_debug_mode, setup_logging

    if args.debug:
        enable_debug_mode()
    else:
        setup_logging(
            level=args.log_level,
            log_to_console=False,
            log_to_file=not args.no_log_file,
        )


def _print_json(data: Any) -> None:
    """Print data as JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def _print_table(rows: list[dict[str, Any]], columns: list[str]) -> None:
    """Print data as a simple table."""
    if not rows:
        print("No results.")
        return

    widths = {col: len(col) for col in columns}
    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(str(row.get(col, ""))))

    header = "  ".join(col.ljust(widths[col]) for col in columns)
    print(header)
    print("-" * len(header))
    for row in rows:
        print("  ".join(str(row.get(col, "")).ljust(widths[col]) for col in columns))


# =============================================================================
# CLI Command Handlers
# =============================================================================


def cmd_list(args: argparse.Namespace) -> int:
    """Handle list command."""
    config = load_config()
    session_dir = get_session_dir(args.dir, config)
    rows = []
    for name in list_sessions(session_dir):
        try:
            doc = read_session(get_session_file(name, args.dir, config))
        except (SessionFormatError, SessionLoadError) as e:
            print(f"Warning: skipping {name}: {e.message}", file=sys.stderr)
            continue
        if doc is None:
            continue
        rows.append(
            {
                "name": name,
                "label": describe_session(name, doc),
                "tab_scoped": doc.tab_scoped,
                "tabs": len(doc.tabs),
                "documents": len(doc.documents),
                "cwd": doc.tabs[0].cwd if doc.tab_scoped else doc.cwd,
            }
        )

    if args.json:
        _print_json(rows)
        return 0

    if not rows:
        print(f"No sessions in {session_dir}.")
        return 0
    _print_table(
        [
            {
                "Name": row["name"],
                "Scope": "tab" if row["tab_scoped"] else "global",
                "Tabs": row["tabs"],
                "Documents": row["documents"],
                "Directory": row["cwd"] or "-",
            }
            for row in rows
        ],
        ["Name", "Scope", "Tabs", "Documents", "Directory"],
    )
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle show command."""
    config = load_config()
    path = get_session_file(args.name, args.dir, config)
    doc = read_session(path)
    if doc is None:
        raise SessionNotFoundError(args.name, file_path=str(path))

    if args.json:
        _print_json(session_to_dict(doc))
        return 0

    print(describe_session(args.name, doc))
    print(f"  Geometry: {doc.geometry.width}x{doc.geometry.height}")
    print(f"  Tabs: {len(doc.tabs)}")
    for name in documents_in_layout(doc):
        print(f"  - {name}")
    hidden = len(doc.documents) - len(documents_in_layout(doc))
    if hidden > 0:
        print(f"  ({hidden} more documents not shown in a window)")
    if doc.extensions:
        print(f"  Extensions: {', '.join(sorted(doc.extensions))}")
    return 0


def cmd_delete(args: argparse.Namespace) -> int:
    """Handle delete command."""
    config = load_config()
    path = get_session_file(args.name, args.dir, config)
    if not delete_session(path):
        raise SessionNotFoundError(args.name, file_path=str(path))

    if args.json:
        _print_json({"deleted": args.name})
    else:
        print(f"Deleted session {args.name}")
    return 0


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to a parser."""
    parser.add_argument(
        "--dir",
        help="Session directory name or absolute path (default: from config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="workspace-sessions",
        description="Inspect and manage saved editor workspace sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List saved sessions
  python -m workspace_sessions list

  # Show what a session contains
  python -m workspace_sessions show work

  # Delete a session from a custom directory
  python -m workspace_sessions delete work --dir /tmp/sessions
""",
    )

    # Global arguments
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to console",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_parser = subparsers.add_parser("list", help="List saved sessions")
    _add_common_args(list_parser)

    show_parser = subparsers.add_parser("show", help="Show the contents of a session")
    show_parser.add_argument("name", help="Session name")
    _add_common_args(show_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a saved session")
    delete_parser.add_argument("name", help="Session name")
    _add_common_args(delete_parser)

    return parser


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "delete": cmd_delete,
}


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the workspace sessions CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except WorkspaceSessionsError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
