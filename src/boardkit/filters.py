"""Evaluate filter trees against cards."""

from __future__ import annotations

import logging
import re

from boardkit.dates import HALF_DAY_MS, DateProperty, parse_date_property
from boardkit.linked import extract_card_ids
from boardkit.models import Card, FilterClause, FilterGroup, PropertyTemplate, find_template

logger = logging.getLogger(__name__)

_TIMESTAMP_TYPES = ("createdTime", "updatedTime")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(text: str) -> int | None:
    """Parse a leading integer like parseInt, or None if there isn't one."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def _text(value) -> str:
    """Lower-cased text form of a property value."""
    if isinstance(value, list):
        return ",".join(str(v) for v in value).lower()
    return "" if value is None else str(value).lower()


def apply_filter_group(group: FilterGroup, templates: list[PropertyTemplate], cards: list[Card]) -> list[Card]:
    """Return the cards that meet group, in input order."""
    return [card for card in cards if is_filter_group_met(group, templates, card)]


def is_filter_group_met(group: FilterGroup, templates: list[PropertyTemplate], card: Card) -> bool:
    """Evaluate a filter tree. An empty group is always met."""
    if not group.filters:
        return True

    def met(node) -> bool:
        if node.kind == "group":
            return is_filter_group_met(node, templates, card)
        return is_clause_met(node, templates, card)

    if group.operation == "or":
        return any(met(node) for node in group.filters)
    if group.operation == "and":
        return all(met(node) for node in group.filters)
    raise AssertionError(f"Invalid filter operation {group.operation!r}")


def _resolve(clause: FilterClause, template: PropertyTemplate | None, card: Card):
    """Resolve (value, date_value, card_ids) for a clause on a card."""
    if clause.property_id == "title":
        value = card.title.lower()
    else:
        value = card.properties.get(clause.property_id)

    date_value: DateProperty | None = None
    if template is not None and template.type == "date":
        date_value = parse_date_property(value)

    if not value and template is not None:
        if template.type == "createdBy":
            value = card.created_by
        elif template.type == "updatedBy":
            value = card.modified_by
        elif template.type == "createdTime":
            value = str(card.create_at)
            date_value = parse_date_property(value)
        elif template.type == "updatedTime":
            value = str(card.update_at)
            date_value = parse_date_property(value)

    card_ids = None
    if template is not None and template.type == "card":
        card_ids = extract_card_ids(value)

    return value, date_value, card_ids


def _includes(values: list[str], value, card_ids: list[str] | None) -> bool:
    if card_ids is not None:
        return any(v in card_ids for v in values)
    if isinstance(value, list):
        return any(v in value for v in values)
    return any(v == value for v in values)


def _date_is(date_value: DateProperty, target: int, timestamp: bool) -> bool:
    if timestamp:
        if date_value.from_:
            return target - HALF_DAY_MS < date_value.from_ < target + HALF_DAY_MS
        return False
    if date_value.is_range:
        return date_value.from_ <= target <= date_value.to
    return date_value.from_ == target


def _date_before(date_value: DateProperty, target: int, timestamp: bool) -> bool:
    if not date_value.from_:
        return False
    if timestamp:
        return date_value.from_ < target - HALF_DAY_MS
    return date_value.from_ < target


def _date_after(date_value: DateProperty, target: int, timestamp: bool) -> bool:
    if timestamp:
        return bool(date_value.from_) and date_value.from_ > target + HALF_DAY_MS
    if date_value.to:
        return date_value.to > target
    return bool(date_value.from_) and date_value.from_ > target


_STRING_TESTS = {
    "contains": lambda text, needle: needle in text,
    "notContains": lambda text, needle: needle not in text,
    "startsWith": lambda text, needle: text.startswith(needle),
    "notStartsWith": lambda text, needle: not text.startswith(needle),
    "endsWith": lambda text, needle: text.endswith(needle),
    "notEndsWith": lambda text, needle: not text.endswith(needle),
}

_DATE_TESTS = {
    "is": _date_is,
    "isBefore": _date_before,
    "isAfter": _date_after,
}


def is_clause_met(clause: FilterClause, templates: list[PropertyTemplate], card: Card) -> bool:
    """Evaluate a single clause.

    Conditions that need a value are met when the clause has none.
    """
    template = find_template(templates, clause.property_id)
    value, date_value, card_ids = _resolve(clause, template, card)
    condition = clause.condition

    if condition == "includes":
        return not clause.values or _includes(clause.values, value, card_ids)
    if condition == "notIncludes":
        return not clause.values or not _includes(clause.values, value, card_ids)
    if condition == "isEmpty":
        return len(card_ids) == 0 if card_ids is not None else len(value or "") == 0
    if condition == "isNotEmpty":
        return len(card_ids) > 0 if card_ids is not None else len(value or "") > 0
    if condition == "isSet":
        return bool(value)
    if condition == "isNotSet":
        return not value

    if condition in _STRING_TESTS:
        if not clause.values:
            return True
        return _STRING_TESTS[condition](_text(value), clause.values[0].lower())

    if condition in _DATE_TESTS:
        if not clause.values:
            return True
        if date_value is None:
            if condition == "is":
                return isinstance(value, str) and value.lower() == clause.values[0].lower()
            return False
        target = _parse_int(clause.values[0])
        if target is None:
            return False
        timestamp = template is not None and template.type in _TIMESTAMP_TYPES
        return _DATE_TESTS[condition](date_value, target, timestamp)

    raise AssertionError(f"Invalid filter condition {condition!r}")


def property_that_meets_filter_clause(
    clause: FilterClause, templates: list[PropertyTemplate]
) -> tuple[str, str | None]:
    """Suggest a value for clause's property that satisfies it.

    Returns (property_id, value); value is None when no single value
    can be suggested.
    """
    template = find_template(templates, clause.property_id)
    if template is None:
        logger.warning("no property template %s for filter clause", clause.property_id)
        return clause.property_id, None

    if template.type in ("createdBy", "updatedBy"):
        return clause.property_id, None

    if clause.condition == "includes" and clause.values:
        return clause.property_id, clause.values[0]
    if clause.condition == "isNotEmpty" and template.type == "select" and template.options:
        return clause.property_id, template.options[0].id
    return clause.property_id, None


def properties_that_meet_filter_group(
    group: FilterGroup | None, templates: list[PropertyTemplate]
) -> dict[str, str]:
    """Suggest property values for a new card so it meets group.

    Only the group's direct clauses are considered. For "or" only the
    first clause has to hold.
    """
    if group is None:
        return {}

    clauses = [node for node in group.filters if node.kind == "clause"]
    if not clauses:
        return {}
    if group.operation == "or":
        clauses = clauses[:1]

    result: dict[str, str] = {}
    for clause in clauses:
        property_id, value = property_that_meets_filter_clause(clause, templates)
        if value:
            result[property_id] = value
    return result
