"""Load a board snapshot from a directory or from a git revision."""

from __future__ import annotations

import logging
from functools import cmp_to_key
from pathlib import Path, PurePosixPath

from git import Repo
from git.objects import Blob, Tree

from boardkit.git import file_times, open_repo
from boardkit.ids import compare_ids
from boardkit.models import Board, BoardSnapshot, BoardView, Card
from boardkit.parser import parse_document, load_yaml

logger = logging.getLogger(__name__)

BOARD_FILE = "board.md"
CARDS_DIR = "cards"
VIEWS_DIR = "views"
VIEW_SUFFIXES = (".yaml", ".yml")


def _tree_get(tree: Tree, path: str) -> Blob | Tree | None:
    """Get an item from a tree by relative path, or None if not found."""
    if path in ("", "."):
        return tree
    try:
        return tree[path]
    except KeyError:
        return None


def _read_worktree(board_dir: Path) -> dict[str, str]:
    """Read the board files under board_dir into {relative_path: text}."""
    files: dict[str, str] = {}
    board_file = board_dir / BOARD_FILE
    if board_file.is_file():
        files[BOARD_FILE] = board_file.read_text(encoding="utf-8")
    for sub, suffixes in ((CARDS_DIR, (".md",)), (VIEWS_DIR, VIEW_SUFFIXES)):
        folder = board_dir / sub
        if not folder.is_dir():
            continue
        for item in sorted(folder.iterdir()):
            if item.is_file() and item.suffix in suffixes:
                files[f"{sub}/{item.name}"] = item.read_text(encoding="utf-8")
    return files


def _read_tree(tree: Tree) -> dict[str, str]:
    """Read the board files of a git tree into {relative_path: text}."""
    files: dict[str, str] = {}
    board_blob = _tree_get(tree, BOARD_FILE)
    if isinstance(board_blob, Blob):
        files[BOARD_FILE] = board_blob.data_stream.read().decode("utf-8")
    for sub, suffixes in ((CARDS_DIR, (".md",)), (VIEWS_DIR, VIEW_SUFFIXES)):
        folder = _tree_get(tree, sub)
        if not isinstance(folder, Tree):
            continue
        for item in folder:
            if isinstance(item, Blob) and PurePosixPath(item.name).suffix in suffixes:
                files[f"{sub}/{item.name}"] = item.data_stream.read().decode("utf-8")
    return files


def _load_board_record(text: str) -> Board:
    doc = parse_document(text)
    record = dict(doc.meta)
    if doc.title:
        record["title"] = doc.title
    if doc.body:
        record["description"] = doc.body
    return Board.from_dict(record)


def _load_card(card_id: str, text: str, board_id: str) -> Card:
    doc = parse_document(text)
    record = dict(doc.meta)
    record.update(id=card_id, title=doc.title, boardId=board_id)
    if not isinstance(record.get("properties"), dict):
        if "properties" in record:
            logger.warning("card %s: ignoring malformed properties", card_id)
        record["properties"] = {}
    return Card.from_dict(record)


def _build_snapshot(files: dict[str, str]) -> BoardSnapshot:
    """Deserialize board files into a snapshot. Pure data loading."""
    if BOARD_FILE not in files:
        raise FileNotFoundError(f"No {BOARD_FILE} found")
    board = _load_board_record(files[BOARD_FILE])

    cards = []
    views = {}
    for path, text in files.items():
        folder, _, name = path.partition("/")
        stem = PurePosixPath(name).stem
        if folder == CARDS_DIR:
            try:
                cards.append(_load_card(stem, text, board.id))
            except ValueError as exc:
                raise ValueError(f"{path}: {exc}") from exc
        elif folder == VIEWS_DIR:
            record = load_yaml(text)
            record.setdefault("id", stem)
            try:
                views[str(record["id"])] = BoardView.from_dict(record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("skipping view %s: %s", path, exc)

    cards.sort(key=cmp_to_key(lambda a, b: compare_ids(a.id, b.id)))
    logger.debug("loaded board %s: %d cards, %d views", board.id, len(cards), len(views))
    return BoardSnapshot(board=board, cards=cards, views=views)


def _fill_times_from_history(snapshot: BoardSnapshot, repo: Repo, rev: str, prefix: str) -> None:
    """Fill missing card createAt/updateAt from git history."""
    for card in snapshot.cards:
        if card.create_at and card.update_at:
            continue
        path = str(PurePosixPath(prefix, CARDS_DIR, f"{card.id}.md"))
        times = file_times(repo, rev, path)
        if times is None:
            continue
        added, changed = times
        card.create_at = card.create_at or added
        card.update_at = card.update_at or changed


def load_board(path: str | Path, rev: str | None = None, board_dir: str = ".") -> BoardSnapshot:
    """Load a board snapshot.

    Without rev, reads path/board_dir from the working tree. With rev,
    reads the same directory from that git revision without touching
    the working tree.
    """
    root = Path(path).resolve()
    if rev is None:
        snapshot = _build_snapshot(_read_worktree(root / board_dir))
        snapshot.path = str(root / board_dir)
        return snapshot

    repo = open_repo(root)
    if repo is None:
        raise ValueError(f"'{root}' is not a git repository")
    try:
        commit = repo.commit(rev)
    except Exception:
        raise ValueError(f"Revision '{rev}' not found in repository")

    prefix = (root / board_dir).relative_to(Path(repo.working_tree_dir).resolve()).as_posix()
    tree = _tree_get(commit.tree, prefix)
    if not isinstance(tree, Tree):
        raise FileNotFoundError(f"No board directory '{prefix}' at {rev}")

    snapshot = _build_snapshot(_read_tree(tree))
    snapshot.path = str(root / board_dir)
    snapshot.rev = commit.hexsha
    _fill_times_from_history(snapshot, repo, commit.hexsha, prefix)
    return snapshot
