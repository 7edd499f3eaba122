"""Linked-card property values.

Current format::

    "<boardId>|<cardId1>:<title1>,<cardId2>:<title2>"

Legacy format, one card only::

    "<boardId>:<cardId>:<title>"

Titles may contain colons; only the first colon after the card id
separates it from the title.
"""

from __future__ import annotations

from dataclasses import dataclass, field

UNTITLED = "Untitled"


@dataclass(frozen=True)
class LinkedCard:
    id: str
    title: str = UNTITLED


@dataclass
class LinkedCardValue:
    board_id: str = ""
    cards: list[LinkedCard] = field(default_factory=list)


def _parse_entry(entry: str) -> LinkedCard:
    card_id, sep, title = entry.partition(":")
    if not sep:
        return LinkedCard(id=entry)
    return LinkedCard(id=card_id, title=title or UNTITLED)


def parse_linked_cards(value) -> LinkedCardValue:
    """Parse a linked-card property value in either format.

    Non-string and unrecognised values give an empty result.
    """
    if not value or not isinstance(value, str):
        return LinkedCardValue()

    if "|" in value:
        parts = value.split("|")
        board_id, cards_str = parts[0], parts[1]
        if not cards_str:
            return LinkedCardValue(board_id=board_id)
        cards = [_parse_entry(entry) for entry in cards_str.split(",")]
        return LinkedCardValue(board_id=board_id, cards=[c for c in cards if c.id])

    parts = value.split(":")
    if len(parts) >= 3:
        return LinkedCardValue(
            board_id=parts[0],
            cards=[LinkedCard(id=parts[1], title=":".join(parts[2:]) or UNTITLED)],
        )
    if len(parts) == 2 and parts[1]:
        return LinkedCardValue(board_id=parts[0], cards=[LinkedCard(id=parts[1])])
    return LinkedCardValue(board_id=parts[0] if len(parts) == 2 else "")


def serialize_linked_cards(board_id: str, cards: list[LinkedCard]) -> str:
    """Serialize linked cards in the current format."""
    if not board_id:
        return ""
    if not cards:
        return f"{board_id}|"
    return f"{board_id}|" + ",".join(f"{c.id}:{c.title}" for c in cards)


def extract_card_ids(value) -> list[str]:
    """Return the ids of the cards linked by a property value."""
    return [c.id for c in parse_linked_cards(value).cards]
