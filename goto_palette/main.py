#!/usr/bin/env python3
"""Go to Anything - command palette over sessions, sources, skills and workspaces.

Entry point for the CLI application.
"""

import argparse
import locale
import logging
import os
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_RESULTS_ENV = "GOTO_PALETTE_MAX_RESULTS"


def resolve_max_results(cli_value: int | None) -> int | None:
    """CLI flag wins, then the environment, then the built-in default (None)."""
    if cli_value is not None:
        return cli_value
    raw = os.environ.get(MAX_RESULTS_ENV)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", MAX_RESULTS_ENV, raw)
        return None


def _load(path: str):
    from .snapshot import SnapshotError, load_snapshot

    try:
        return load_snapshot(Path(path))
    except SnapshotError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cmd_browse(args):
    """Launch the TUI palette."""
    from .app import PaletteBrowser

    snapshot = _load(args.snapshot)
    app = PaletteBrowser(snapshot, max_results_per_group=resolve_max_results(args.limit))
    result = app.run()

    if result is not None:
        if result:
            print(f"\n[Sending prompt...]\n{result}\n")
        else:
            print("\n[New session]\n")


def cmd_model(args):
    """Print the grouped palette for a snapshot."""
    from rich.console import Console
    from rich.rule import Rule
    from rich.text import Text

    from .entries import GROUP_HEADINGS, build_palette_entries
    from .palette import build_palette_model

    snapshot = _load(args.snapshot)
    model = build_palette_model(
        snapshot.sessions,
        snapshot.sources,
        snapshot.skills,
        snapshot.workspaces,
        snapshot.active_workspace_id,
        resolve_max_results(args.limit),
    )

    console = Console(soft_wrap=True)
    if not model.has_any_results:
        console.print("No sessions, sources, skills or workspaces found.", style="dim")
        console.print()

    current_group = None
    for entry in build_palette_entries(model, snapshot.active_workspace_id):
        if entry.group != current_group:
            if current_group is not None:
                console.print()
            current_group = entry.group
            console.print(Text(GROUP_HEADINGS[entry.group], style="bold"))
            console.print(Rule(style="dim"))

        row = Text(" ")
        row.append("✓" if entry.is_active else " ", style="green")
        row.append(" ")
        row.append(f"{entry.label:<30}", style="bold" if entry.is_active else "")
        row.append(" ")
        row.append(entry.key, style="cyan")
        if entry.detail:
            row.append(f"  ({entry.detail})", style="dim")
        console.print(row)


def cmd_prompt(args):
    """Print the chat prompt for a settings page."""
    from .palette import get_setting_prompt

    print(get_setting_prompt(args.setting_id))


def main():
    """Main entry point for goto-palette CLI."""
    parser = argparse.ArgumentParser(
        description="Jump to sessions, sources, skills, settings and workspaces",
        prog="goto-palette",
    )
    parser.add_argument(
        "--version", "-v",
        action="store_true",
        help="Show version"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    browse_parser = subparsers.add_parser("browse", help="Launch TUI palette")
    browse_parser.add_argument("snapshot", help="Snapshot JSON file")
    browse_parser.add_argument("--limit", "-l", type=int, help="Max results per group")

    model_parser = subparsers.add_parser("model", help="Print grouped palette results")
    model_parser.add_argument("snapshot", help="Snapshot JSON file")
    model_parser.add_argument("--limit", "-l", type=int, help="Max results per group")

    prompt_parser = subparsers.add_parser("prompt", help="Show the prompt for a settings page")
    prompt_parser.add_argument("setting_id", help="Settings page id (e.g. appearance)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Name ordering follows the user's collation rules
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error:
        logger.warning("Unsupported locale, falling back to code point ordering")

    if args.version:
        from . import __version__
        print(f"goto-palette {__version__}")
        return

    if args.command == "browse":
        cmd_browse(args)
    elif args.command == "model":
        cmd_model(args)
    elif args.command == "prompt":
        cmd_prompt(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
