"""Handler for 'boardkit diff'."""

from boardkit.cli._common import load_snapshot_or_die, output_json, resolve_options
from boardkit.models import BoardPatch
from boardkit.patches import create_patches_from_boards


def describe_patch(patch: BoardPatch) -> list[str]:
    """Human-readable lines for the changes a patch carries."""
    lines = [f"  {name} = {value!r}" for name, value in patch.scalar_changes().items()]
    for key, value in patch.updated_properties.items():
        lines.append(f"  properties.{key} = {value!r}")
    for key in patch.deleted_properties:
        lines.append(f"  properties.{key} deleted")
    for template in patch.updated_card_properties:
        lines.append(f"  property {template.id} '{template.name}' ({template.type}) at {template.index}")
    for template_id in patch.deleted_card_properties:
        lines.append(f"  property {template_id} deleted")
    return lines


def board_diff(args) -> int:
    """Show the update and undo patches between two versions of the board."""
    resolve_options(args)
    old = load_snapshot_or_die(args, rev=args.old)
    new = load_snapshot_or_die(args, rev=args.new)

    update, undo = create_patches_from_boards(new.board, old.board)

    if args.json:
        output_json({"update": update.to_dict(), "undo": undo.to_dict()})
    else:
        update_lines = describe_patch(update)
        if not update_lines:
            print("No changes")
            return 0
        print("update:")
        print("\n".join(update_lines))
        print("undo:")
        print("\n".join(describe_patch(undo)))

    return 0
