"""Handlers for 'boardkit card' commands."""

import time

from boardkit.cli._common import error, find_view, load_snapshot_or_die, output_json, output_result, resolve_options
from boardkit.filters import apply_filter_group, properties_that_meet_filter_group
from boardkit.git import current_user
from boardkit.ids import next_card_id
from boardkit.models import Card
from boardkit.writer import commit_paths, write_card


def card_list(args) -> int:
    """List the cards that match a view's filter."""
    resolve_options(args)
    snapshot = load_snapshot_or_die(args)
    view = find_view(snapshot, args.view, args.json)

    try:
        cards = apply_filter_group(view.filter, snapshot.board.card_properties, snapshot.cards)
    except AssertionError as e:
        error(f"invalid filter in view '{view.id}': {e}", args.json)

    if args.json:
        output_json([{"id": c.id, "title": c.title, "properties": c.properties} for c in cards])
    else:
        for c in cards:
            print(f"{c.id}  {c.title}")

    return 0


def card_add(args) -> int:
    """Create a card pre-filled so it matches the view's filter."""
    resolve_options(args)
    snapshot = load_snapshot_or_die(args)
    view = find_view(snapshot, args.view, args.json)

    properties = properties_that_meet_filter_group(view.filter, snapshot.board.card_properties)
    now = int(time.time() * 1000)
    user = current_user(args.repo)
    card = Card(
        id=next_card_id([c.id for c in snapshot.cards]),
        title=args.title,
        created_by=user,
        modified_by=user,
        create_at=now,
        update_at=now,
        properties=properties,
        board_id=snapshot.board.id,
    )
    path = write_card(snapshot.path, card, body=args.body)

    data = {"id": card.id, "title": card.title, "properties": card.properties, "path": str(path)}
    text = f"Created card {card.id}"
    if args.commit:
        commit = commit_paths(args.repo, [path], f"Add card {card.id}: {card.title}")
        data["commit"] = commit
        text += f" ({commit[:7]})"

    output_result(data, text, args.json)
    return 0
