"""Patch/undo generation, filtering and grouping for board snapshots."""

from boardkit.dates import DateProperty, date_property_to_string, parse_date_property
from boardkit.filters import (
    apply_filter_group,
    is_clause_met,
    is_filter_group_met,
    properties_that_meet_filter_group,
    property_that_meets_filter_clause,
)
from boardkit.grouping import get_visible_and_hidden_groups
from boardkit.linked import LinkedCard, LinkedCardValue, extract_card_ids, parse_linked_cards, serialize_linked_cards
from boardkit.loader import load_board
from boardkit.models import (
    Board,
    BoardGroup,
    BoardPatch,
    BoardSnapshot,
    BoardView,
    Card,
    FilterClause,
    FilterGroup,
    GroupResult,
    PropertyOption,
    PropertyTemplate,
    filter_from_dict,
)
from boardkit.patches import (
    apply_board_patch,
    create_card_properties_patches,
    create_patches_from_boards,
    is_property_equal,
)

__all__ = [
    "Board",
    "BoardGroup",
    "BoardPatch",
    "BoardSnapshot",
    "BoardView",
    "Card",
    "DateProperty",
    "FilterClause",
    "FilterGroup",
    "GroupResult",
    "LinkedCard",
    "LinkedCardValue",
    "PropertyOption",
    "PropertyTemplate",
    "apply_board_patch",
    "apply_filter_group",
    "create_card_properties_patches",
    "create_patches_from_boards",
    "date_property_to_string",
    "extract_card_ids",
    "filter_from_dict",
    "get_visible_and_hidden_groups",
    "is_clause_met",
    "is_filter_group_met",
    "is_property_equal",
    "load_board",
    "parse_date_property",
    "parse_linked_cards",
    "properties_that_meet_filter_group",
    "property_that_meets_filter_clause",
    "serialize_linked_cards",
]
