"""Handler for 'boardkit board'."""

from boardkit.cli._common import load_snapshot_or_die, output_json, resolve_options


def board_summary(args) -> int:
    """Show board title, property templates, views and card count."""
    resolve_options(args)
    snapshot = load_snapshot_or_die(args)
    board = snapshot.board

    properties = [
        {"id": t.id, "name": t.name, "type": t.type, "options": len(t.options)} for t in board.card_properties
    ]
    views = [{"id": v.id, "title": v.title} for v in snapshot.views.values()]

    if args.json:
        output_json(
            {
                "id": board.id,
                "title": board.title,
                "cards": len(snapshot.cards),
                "properties": properties,
                "views": views,
            }
        )
    else:
        cards = "card" if len(snapshot.cards) == 1 else "cards"
        print(f"{board.title}  ({len(snapshot.cards)} {cards})")
        for p in properties:
            print(f"  {p['id']:<12} {p['name']:<16} {p['type']}")
        for v in views:
            print(f"  view {v['id']}  {v['title']}")

    return 0
