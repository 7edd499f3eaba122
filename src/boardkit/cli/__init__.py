"""CLI argument parser for boardkit."""

import argparse

from boardkit.cli.board import board_summary
from boardkit.cli.card import card_add, card_list
from boardkit.cli.diff import board_diff
from boardkit.cli.group import group_cards


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=".", help="Path to the repository (default: .)")
    common.add_argument("--dir", default=None, help="Board directory inside the repository (config: boardkit.dir)")
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="boardkit",
        description="Filter, group and diff kanban board snapshots",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- board ---
    board_p = nouns.add_parser("board", help="Show board summary", parents=[common])
    board_p.set_defaults(func=board_summary)

    # --- card ---
    card_p = nouns.add_parser("card", help="Card operations", parents=[common])
    card_verbs = card_p.add_subparsers(dest="verb")

    card_list_p = card_verbs.add_parser("list", help="List cards matching a view", parents=[common])
    card_list_p.add_argument("--view", default=None, help="View ID (config: boardkit.view)")
    card_list_p.set_defaults(func=card_list)

    card_add_p = card_verbs.add_parser("add", help="Create a card matching a view", parents=[common])
    card_add_p.add_argument("title", help="Card title")
    card_add_p.add_argument("--body", default="", help="Card body text")
    card_add_p.add_argument("--view", default=None, help="View ID (config: boardkit.view)")
    card_add_p.add_argument("--commit", action="store_true", help="Commit the new card file")
    card_add_p.set_defaults(func=card_add)

    # card with no verb = list
    card_p.set_defaults(func=card_list, view=None)

    # --- group ---
    group_p = nouns.add_parser("group", help="Group cards by a property", parents=[common])
    group_p.add_argument("--view", default=None, help="View ID (config: boardkit.view)")
    group_p.add_argument("--by", default=None, help="Property ID or name to group by")
    group_p.set_defaults(func=group_cards)

    # --- diff ---
    diff_p = nouns.add_parser("diff", help="Update/undo patches between two revisions", parents=[common])
    diff_p.add_argument("old", help="Old revision")
    diff_p.add_argument("new", nargs="?", default=None, help="New revision (default: working tree)")
    diff_p.set_defaults(func=board_diff)

    return parser
