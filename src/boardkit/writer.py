"""Write board files to a board directory and optionally commit them."""

import logging
from pathlib import Path

import yaml
from git import Repo

from boardkit.loader import BOARD_FILE, CARDS_DIR, VIEWS_DIR
from boardkit.models import Board, BoardView, Card
from boardkit.parser import Document, serialize_document

logger = logging.getLogger(__name__)


def card_to_text(card: Card, body: str = "") -> str:
    """Serialize a card as markdown with its record in the front-matter."""
    record = card.to_dict()
    meta = {
        key: record[key]
        for key in ("createdBy", "modifiedBy", "createAt", "updateAt", "properties")
        if record[key]
    }
    return serialize_document(Document(title=card.title, body=body, meta=meta))


def write_card(board_dir: str | Path, card: Card, body: str = "") -> Path:
    """Write card to board_dir/cards/<id>.md and return the path."""
    path = Path(board_dir) / CARDS_DIR / f"{card.id}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(card_to_text(card, body), encoding="utf-8")
    logger.debug("wrote card %s to %s", card.id, path)
    return path


def write_board(board_dir: str | Path, board: Board) -> Path:
    """Write the board record to board_dir/board.md and return the path."""
    meta = board.to_dict()
    title = meta.pop("title")
    description = meta.pop("description")
    path = Path(board_dir) / BOARD_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_document(Document(title=title, body=description, meta=meta)), encoding="utf-8")
    return path


def write_view(board_dir: str | Path, view: BoardView) -> Path:
    """Write a view to board_dir/views/<id>.yaml and return the path."""
    path = Path(board_dir) / VIEWS_DIR / f"{view.id}.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(view.to_dict(), sort_keys=False, allow_unicode=True), encoding="utf-8")
    return path


def commit_paths(repo_path: str | Path, paths: list[Path], message: str) -> str:
    """Stage paths and commit them. Returns the commit hash."""
    repo = Repo(repo_path, search_parent_directories=True)
    root = Path(repo.working_tree_dir).resolve()
    repo.index.add([str(Path(p).resolve().relative_to(root)) for p in paths])
    commit = repo.index.commit(message)
    logger.info("committed %s: %s", commit.hexsha[:7], message)
    return commit.hexsha
