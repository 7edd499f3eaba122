"""Group cards into board columns by a property value."""

from __future__ import annotations

from boardkit.linked import parse_linked_cards
from boardkit.models import BoardGroup, Card, GroupResult, PropertyOption, PropertyTemplate

_PERSON_TYPES = ("createdBy", "updatedBy", "person")


def _empty_option(template: PropertyTemplate) -> PropertyOption:
    return PropertyOption(id="", value=f"No {template.name}", color="")


def _selected(value) -> list[str]:
    """Normalize a single- or multi-valued property to a list of ids."""
    if isinstance(value, list):
        return [v for v in value if v]
    return [value] if value else []


def _split_hidden(groups: dict[str, BoardGroup], hidden_option_ids: list[str]) -> GroupResult:
    """Route first-seen buckets to hidden if their key is hidden."""
    hidden = set(hidden_option_ids)
    result = GroupResult()
    for key, group in groups.items():
        (result.hidden if key in hidden else result.visible).append(group)
    return result


def _group_first_seen(cards: list[Card], hidden_option_ids: list[str], bucket) -> GroupResult:
    """Bucket cards in first-seen order.

    bucket(card) returns (key, option); the option of the first card
    seen with a key labels the bucket.
    """
    groups: dict[str, BoardGroup] = {}
    for card in cards:
        key, option = bucket(card)
        if key not in groups:
            groups[key] = BoardGroup(option=option)
        groups[key].cards.append(card)
    return _split_hidden(groups, hidden_option_ids)


def _person_bucket(template: PropertyTemplate):
    def bucket(card: Card) -> tuple[str, PropertyOption]:
        if template.type == "createdBy":
            key = card.created_by
        elif template.type == "updatedBy":
            key = card.modified_by
        else:
            value = card.properties.get(template.id)
            key = value if isinstance(value, str) else ""
        if not key:
            return "", _empty_option(template)
        return key, PropertyOption(id=key, value=key)

    return bucket


def _multi_person_bucket(template: PropertyTemplate):
    def bucket(card: Card) -> tuple[str, PropertyOption]:
        key = ",".join(sorted(_selected(card.properties.get(template.id))))
        if not key:
            return "", _empty_option(template)
        return key, PropertyOption(id=key, value=key)

    return bucket


def _linked_card_bucket(template: PropertyTemplate):
    def bucket(card: Card) -> tuple[str, PropertyOption]:
        linked = sorted(parse_linked_cards(card.properties.get(template.id)).cards, key=lambda c: c.id)
        if not linked:
            return "", _empty_option(template)
        key = ",".join(f"{c.id}:{c.title}" for c in linked)
        return key, PropertyOption(id=key, value=", ".join(c.title for c in linked))

    return bucket


def _multi_select_bucket(template: PropertyTemplate):
    def bucket(card: Card) -> tuple[str, PropertyOption]:
        selected = _selected(card.properties.get(template.id))
        if not selected:
            return "", _empty_option(template)
        option_ids = sorted(selected)
        options = [template.find_option(i) for i in option_ids]
        label = ", ".join(o.value if o else i for o, i in zip(options, option_ids))
        # colored like the card's first selected option
        first = template.find_option(selected[0])
        color = first.color if first else ""
        return ",".join(option_ids), PropertyOption(id=",".join(option_ids), value=label, color=color)

    return bucket


def group_cards_by_options(
    cards: list[Card], option_ids: list[str], group_by_property: PropertyTemplate
) -> list[BoardGroup]:
    """Build one bucket per option id, in option_ids order.

    The empty id collects cards with no value or a value that is not
    an existing option. Ids of deleted options are skipped.
    """
    groups = []
    for option_id in option_ids:
        if option_id:
            option = group_by_property.find_option(option_id)
            if option is None:
                continue
            matching = [c for c in cards if c.properties.get(group_by_property.id) == option_id]
            groups.append(BoardGroup(option=option, cards=matching))
        else:
            empty = []
            for card in cards:
                value = card.properties.get(group_by_property.id)
                if not value or not isinstance(value, str) or group_by_property.find_option(value) is None:
                    empty.append(card)
            groups.append(BoardGroup(option=_empty_option(group_by_property), cards=empty))
    return groups


def _get_option_groups(
    cards: list[Card],
    visible_option_ids: list[str],
    hidden_option_ids: list[str],
    group_by_property: PropertyTemplate,
) -> GroupResult:
    mentioned = set(visible_option_ids) | set(hidden_option_ids)
    unassigned = [o.id for o in group_by_property.options if o.id not in mentioned]
    all_visible = [*visible_option_ids, *unassigned]

    # The empty bucket comes first unless it was placed explicitly.
    if "" not in all_visible and "" not in hidden_option_ids:
        all_visible.insert(0, "")

    return GroupResult(
        visible=group_cards_by_options(cards, all_visible, group_by_property),
        hidden=group_cards_by_options(cards, hidden_option_ids, group_by_property),
    )


def get_visible_and_hidden_groups(
    cards: list[Card],
    visible_option_ids: list[str],
    hidden_option_ids: list[str],
    group_by_property: PropertyTemplate,
) -> GroupResult:
    """Partition cards into visible and hidden buckets by group_by_property.

    Select-like properties follow the order of the option id lists.
    Person, multi-person, linked-card and multi-select properties build
    buckets in the order their values are first seen.
    """
    if group_by_property.type in _PERSON_TYPES:
        bucket = _person_bucket(group_by_property)
    elif group_by_property.type == "multiPerson":
        bucket = _multi_person_bucket(group_by_property)
    elif group_by_property.type == "card":
        bucket = _linked_card_bucket(group_by_property)
    elif group_by_property.type == "multiSelect":
        bucket = _multi_select_bucket(group_by_property)
    else:
        return _get_option_groups(cards, visible_option_ids, hidden_option_ids, group_by_property)
    return _group_first_seen(cards, hidden_option_ids, bucket)
