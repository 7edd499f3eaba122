"""Handler for 'boardkit group'."""

from boardkit.cli._common import (
    error,
    find_property,
    find_view,
    load_snapshot_or_die,
    output_json,
    resolve_options,
)
from boardkit.filters import apply_filter_group
from boardkit.grouping import get_visible_and_hidden_groups


def _format_groups(heading: str, groups, lines: list[str]) -> None:
    lines.append(heading)
    for group in groups:
        count = len(group.cards)
        lines.append(f"  {group.option.value or group.option.id}  ({count} {'card' if count == 1 else 'cards'})")
        for card in group.cards:
            lines.append(f"    {card.id}  {card.title}")


def group_cards(args) -> int:
    """Show the cards of a view grouped into visible and hidden buckets."""
    resolve_options(args)
    snapshot = load_snapshot_or_die(args)
    view = find_view(snapshot, args.view, args.json)
    templates = snapshot.board.card_properties

    ref = args.by or view.group_by_id
    if ref:
        template = find_property(snapshot, ref, args.json)
    else:
        template = next((t for t in templates if t.type == "select"), None)
        if template is None:
            error("No property to group by; pass --by", args.json)

    try:
        cards = apply_filter_group(view.filter, templates, snapshot.cards)
    except AssertionError as e:
        error(f"invalid filter in view '{view.id}': {e}", args.json)

    result = get_visible_and_hidden_groups(cards, view.visible_option_ids, view.hidden_option_ids, template)

    if args.json:
        output_json(
            {
                "property": template.id,
                "visible": [g.to_dict() for g in result.visible],
                "hidden": [g.to_dict() for g in result.hidden],
            }
        )
    else:
        lines: list[str] = []
        _format_groups(f"{template.name} (visible)", result.visible, lines)
        if result.hidden:
            _format_groups(f"{template.name} (hidden)", result.hidden, lines)
        print("\n".join(lines))

    return 0
