"""Shared helpers for CLI command handlers."""

import json
import sys

from boardkit.git import read_config
from boardkit.loader import load_board
from boardkit.models import BoardSnapshot, BoardView, FilterGroup, PropertyTemplate


def resolve_options(args) -> None:
    """Fill --dir/--view/--commit left unset from the [boardkit] git config."""
    config = read_config(args.repo)
    if getattr(args, "dir", None) is None:
        args.dir = config["dir"]
    if getattr(args, "view", None) is None:
        args.view = config["view"]
    if hasattr(args, "commit"):
        args.commit = bool(args.commit or config["commit"])


def load_snapshot_or_die(args, rev: str | None = None) -> BoardSnapshot:
    """Load the board at args.repo/args.dir. Exit 1 with message on failure."""
    try:
        return load_board(args.repo, rev=rev, board_dir=args.dir)
    except (FileNotFoundError, ValueError) as e:
        error(str(e), args.json)


def find_view(snapshot: BoardSnapshot, view_id: str, json_mode: bool) -> BoardView:
    """Lookup a view by id; an empty id gives an unfiltered view.

    Exit 1 listing available views if not found.
    """
    if not view_id:
        return BoardView(id="", filter=FilterGroup())
    view = snapshot.views.get(view_id)
    if view is not None:
        return view
    available = [f"  {k}  {v.title}" for k, v in snapshot.views.items()]
    error(f"View '{view_id}' not found. Available:\n" + "\n".join(available), json_mode)


def find_property(snapshot: BoardSnapshot, ref: str, json_mode: bool) -> PropertyTemplate:
    """Lookup a property template by id, then by name (case-insensitive)."""
    templates = snapshot.board.card_properties
    for template in templates:
        if template.id == ref:
            return template
    for template in templates:
        if template.name.lower() == ref.lower():
            return template
    available = [f"  {t.id}  {t.name} ({t.type})" for t in templates]
    error(f"Property '{ref}' not found. Available:\n" + "\n".join(available), json_mode)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
