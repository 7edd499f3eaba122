"""Tests for linked-card property values."""

from boardkit.linked import (
    LinkedCard,
    LinkedCardValue,
    extract_card_ids,
    parse_linked_cards,
    serialize_linked_cards,
)


def test_parse_current_format():
    value = parse_linked_cards("b1|c1:First,c2:Second")
    assert value.board_id == "b1"
    assert value.cards == [LinkedCard("c1", "First"), LinkedCard("c2", "Second")]


def test_title_with_colon_round_trip():
    text = serialize_linked_cards("b1", [LinkedCard(id="c1", title="Hello:World")])
    assert text == "b1|c1:Hello:World"
    assert parse_linked_cards(text).cards == [LinkedCard(id="c1", title="Hello:World")]


def test_entry_without_colon_is_untitled():
    assert parse_linked_cards("b1|c1").cards == [LinkedCard(id="c1", title="Untitled")]


def test_entry_with_empty_title_is_untitled():
    assert parse_linked_cards("b1|c1:").cards == [LinkedCard(id="c1", title="Untitled")]


def test_empty_ids_dropped():
    assert parse_linked_cards("b1|c1:A,,:B").cards == [LinkedCard("c1", "A")]


def test_board_selected_no_cards():
    assert parse_linked_cards("b1|") == LinkedCardValue(board_id="b1")
    assert serialize_linked_cards("b1", []) == "b1|"


def test_legacy_format():
    value = parse_linked_cards("b1:c1:Title: with colon")
    assert value.board_id == "b1"
    assert value.cards == [LinkedCard("c1", "Title: with colon")]


def test_legacy_format_without_title():
    assert parse_linked_cards("b1:c1").cards == [LinkedCard("c1", "Untitled")]


def test_unrecognised_values_are_empty():
    assert parse_linked_cards("") == LinkedCardValue()
    assert parse_linked_cards(None) == LinkedCardValue()
    assert parse_linked_cards(["b1|c1:A"]) == LinkedCardValue()
    assert parse_linked_cards("plain text").cards == []


def test_serialize_without_board():
    assert serialize_linked_cards("", [LinkedCard("c1", "A")]) == ""


def test_extract_card_ids():
    assert extract_card_ids("b1|c1:A,c2:B") == ["c1", "c2"]
    assert extract_card_ids("b1:c7:Old") == ["c7"]
    assert extract_card_ids("b1|") == []
