"""Update and undo patches between two versions of a board."""

from __future__ import annotations

from dataclasses import replace

from boardkit.models import Board, BoardPatch, PropertyTemplate, board_scalar_fields, find_template


def is_property_equal(a: PropertyTemplate, b: PropertyTemplate) -> bool:
    """Check two templates for equal scalar fields and equal options.

    Options are compared as a set keyed by option id; their order
    does not matter.
    """
    if (a.id, a.name, a.type, a.index) != (b.id, b.name, b.type, b.index):
        return False
    if len(a.options) != len(b.options):
        return False
    for option in a.options:
        if b.find_option(option.id) != option:
            return False
    return True


def _with_index(templates: list[PropertyTemplate]) -> list[PropertyTemplate]:
    return [replace(t, index=i) for i, t in enumerate(templates)]


def _changed(templates: list[PropertyTemplate], others: list[PropertyTemplate]) -> list[PropertyTemplate]:
    """Templates (annotated with their index) that are new or differ in others."""
    changed = []
    for i, template in enumerate(templates):
        other = find_template(others, template.id)
        if other is None or not is_property_equal(template, other):
            changed.append(replace(template, index=i))
    return changed


def create_card_properties_patches(
    new: list[PropertyTemplate],
    old: list[PropertyTemplate],
) -> tuple[BoardPatch, BoardPatch]:
    """Build (update, undo) patches for a board's card property schema.

    Any change to the id sequence re-sends the whole list with
    indices, since a partial diff can't express the new order.
    """
    new_ids = [t.id for t in new]
    old_ids = [t.id for t in old]

    new_id_set, old_id_set = set(new_ids), set(old_ids)
    deleted_in_new = [i for i in old_ids if i not in new_id_set]
    deleted_in_old = [i for i in new_ids if i not in old_id_set]

    if new_ids != old_ids:
        return (
            BoardPatch(updated_card_properties=_with_index(new), deleted_card_properties=deleted_in_new),
            BoardPatch(updated_card_properties=_with_index(old), deleted_card_properties=deleted_in_old),
        )

    return (
        BoardPatch(updated_card_properties=_changed(new, old), deleted_card_properties=deleted_in_new),
        BoardPatch(updated_card_properties=_changed(old, new), deleted_card_properties=deleted_in_old),
    )


def _property_changes(source: dict, target: dict) -> tuple[dict, list[str]]:
    """Return (updated, deleted) moving the properties map from source to target."""
    updated = {k: v for k, v in target.items() if source.get(k) != v or k not in source}
    deleted = [k for k in source if k not in target]
    return updated, deleted


def create_patches_from_boards(new: Board, old: Board) -> tuple[BoardPatch, BoardPatch]:
    """Build (update, undo) patches moving old to new and back."""
    update, undo = create_card_properties_patches(new.card_properties, old.card_properties)

    for name in board_scalar_fields():
        new_value, old_value = getattr(new, name), getattr(old, name)
        if new_value != old_value:
            setattr(update, name, new_value)
            setattr(undo, name, old_value)

    update.updated_properties, update.deleted_properties = _property_changes(old.properties, new.properties)
    undo.updated_properties, undo.deleted_properties = _property_changes(new.properties, old.properties)
    return update, undo


def apply_board_patch(board: Board, patch: BoardPatch) -> Board:
    """Return a new board with patch applied.

    Updated templates replace same-id templates in place or are
    appended, then the list is ordered by the patch's indices.
    The index annotation is cleared on the result.
    """
    deleted_keys = set(patch.deleted_properties)
    properties = {k: v for k, v in board.properties.items() if k not in deleted_keys}
    properties.update(patch.updated_properties)

    deleted = set(patch.deleted_card_properties)
    templates = [t for t in board.card_properties if t.id not in deleted]
    positions = {t.id: i for i, t in enumerate(templates)}
    for template in patch.updated_card_properties:
        if template.id in positions:
            templates[positions[template.id]] = template
        else:
            positions[template.id] = len(templates)
            templates.append(template)

    def order(item: tuple[int, PropertyTemplate]) -> int:
        position, template = item
        return template.index if template.index is not None else position

    ordered = [replace(t, index=None) for _, t in sorted(enumerate(templates), key=order)]
    return replace(board, properties=properties, card_properties=ordered, **patch.scalar_changes())
