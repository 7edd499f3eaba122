"""Tests for writing board files."""

from git import Repo

from boardkit.models import Card
from boardkit.parser import parse_document
from boardkit.writer import card_to_text, commit_paths, write_card


def test_card_to_text_skips_empty_fields():
    text = card_to_text(Card(id="001", title="Bare"))
    assert text == "# Bare\n"


def test_card_to_text_with_body(cards):
    doc = parse_document(card_to_text(cards[0], body="Steps to reproduce."))
    assert doc.title == "Fix login bug"
    assert doc.body == "Steps to reproduce."
    assert doc.meta["createdBy"] == "alice"
    assert doc.meta["properties"]["tags"] == ["ui", "bug"]
    assert "id" not in doc.meta


def test_write_card_creates_cards_dir(tmp_path):
    path = write_card(tmp_path, Card(id="042", title="Answer"))
    assert path == tmp_path / "cards" / "042.md"
    assert parse_document(path.read_text()).title == "Answer"


def test_board_file_layout(board_dir):
    assert (board_dir / "board.md").read_text().startswith("---\n")
    assert sorted(p.name for p in (board_dir / "views").iterdir()) == ["mine.yaml", "open.yaml"]


def test_commit_paths(board_repo):
    path = write_card(board_repo, Card(id="004", title="New"))
    sha = commit_paths(board_repo, [path], "Add card 004")
    repo = Repo(board_repo)
    assert repo.head.commit.hexsha == sha
    assert repo.head.commit.message == "Add card 004"
    assert "cards/004.md" in repo.head.commit.stats.files


def test_commit_paths_from_subdirectory(tmp_path):
    repo = Repo.init(tmp_path)
    board = tmp_path / "boards" / "main"
    path = write_card(board, Card(id="001", title="Deep"))
    commit_paths(board, [path], "Deep card")
    assert "boards/main/cards/001.md" in repo.head.commit.stats.files
