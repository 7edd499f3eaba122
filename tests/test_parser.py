"""Tests for markdown documents with YAML front-matter."""

from boardkit.parser import Document, load_yaml, parse_document, serialize_document


def test_parse_title_body_and_meta():
    doc = parse_document("---\ncreatedBy: alice\n---\n# Hello\n\nSome text.\n")
    assert doc.title == "Hello"
    assert doc.body == "Some text."
    assert doc.meta == {"createdBy": "alice"}


def test_parse_without_front_matter():
    doc = parse_document("# Just a title\n")
    assert doc.title == "Just a title"
    assert doc.body == ""
    assert doc.meta == {}


def test_parse_without_title():
    doc = parse_document("no heading here\n")
    assert doc.title == ""
    assert doc.body == "no heading here"


def test_h1_inside_code_fence_is_not_a_title():
    doc = parse_document("```\n# comment\n```\n# Real\n")
    assert doc.title == "Real"


def test_invalid_front_matter_is_ignored():
    assert parse_document("---\n: [\n---\n# T\n").meta == {}
    assert parse_document("---\n- a list\n---\n# T\n").meta == {}


def test_serialize_round_trip():
    doc = Document(title="Card", body="Line one.\n\n## Notes\n\nMore.", meta={"properties": {"status": "todo"}})
    assert parse_document(serialize_document(doc)) == doc


def test_serialize_demotes_body_h1():
    text = serialize_document(Document(title="Card", body="# Inner\n\n```\n# kept\n```"))
    assert "## Inner" in text
    assert "# kept" in text
    assert parse_document(text).title == "Card"


def test_serialize_keeps_numeric_strings_as_strings():
    doc = Document(title="T", meta={"due": "1709251200000"})
    assert parse_document(serialize_document(doc)).meta["due"] == "1709251200000"


def test_serialize_empty_document():
    assert serialize_document(Document()) == "\n"


def test_load_yaml():
    assert load_yaml("id: open\ntitle: Open\n") == {"id": "open", "title": "Open"}
    assert load_yaml("[1, 2]") == {}
    assert load_yaml("{bad") == {}
    assert load_yaml("") == {}
