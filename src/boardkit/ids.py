"""Card ID ordering and allocation."""

from functools import cmp_to_key

CARD_ID_WIDTH = 3


def compare_ids(left: str, right: str) -> int:
    """Compare two card IDs as if zero-padded to the same length.

    Returns -1, 0 or 1. "9" sorts before "10", "a" before "10".
    """
    width = max(len(left), len(right))
    left, right = left.zfill(width), right.zfill(width)
    return (left > right) - (left < right)


def sort_ids(ids) -> list[str]:
    """Return ids in card order."""
    return sorted(ids, key=cmp_to_key(compare_ids))


def next_card_id(existing: list[str], width: int = CARD_ID_WIDTH) -> str:
    """Allocate the ID after the highest existing one, zero-padded to width.

    [] -> "001", ["001", "009"] -> "010". A non-numeric highest ID
    "fish" yields "1" followed by one zero per character.
    """
    if not existing:
        return "1".zfill(width)
    highest = sort_ids(existing)[-1]
    try:
        number = int(highest) + 1
    except ValueError:
        return "1" + "0" * len(highest)
    return str(number).zfill(width)
