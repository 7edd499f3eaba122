"""Tests for 'boardkit board'."""

import json
from argparse import Namespace

import pytest
from git import Repo

from boardkit.cli.board import board_summary


def test_board_summary(board_repo, capsys):
    args = Namespace(repo=str(board_repo), dir=None, json=False)
    assert board_summary(args) == 0

    out = capsys.readouterr().out
    assert "Roadmap  (3 cards)" in out
    assert "status" in out
    assert "view open  Open work" in out


def test_board_summary_json(board_repo, capsys):
    args = Namespace(repo=str(board_repo), dir=None, json=True)
    assert board_summary(args) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["title"] == "Roadmap"
    assert data["cards"] == 3
    assert data["properties"][0] == {"id": "status", "name": "Status", "type": "select", "options": 3}
    assert sorted(v["id"] for v in data["views"]) == ["mine", "open"]


def test_board_in_subdirectory(tmp_path, board_dir, capsys):
    Repo.init(tmp_path)
    args = Namespace(repo=str(tmp_path), dir="board", json=True)
    assert board_summary(args) == 0
    assert json.loads(capsys.readouterr().out)["cards"] == 3


def test_board_dir_from_config(tmp_path, board_dir, capsys):
    repo = Repo.init(tmp_path)
    writer = repo.config_writer("repository")
    writer.set_value("boardkit", "dir", "board")
    writer.release()

    args = Namespace(repo=str(tmp_path), dir=None, json=True)
    assert board_summary(args) == 0
    assert json.loads(capsys.readouterr().out)["title"] == "Roadmap"


def test_board_missing(tmp_path, capsys):
    Repo.init(tmp_path)
    args = Namespace(repo=str(tmp_path), dir=None, json=True)
    with pytest.raises(SystemExit, match="1"):
        board_summary(args)
    assert "board.md" in json.loads(capsys.readouterr().err)["error"]


def test_board_with_bad_card_timestamp(board_repo, capsys):
    (board_repo / "cards" / "004.md").write_text("---\ncreateAt: [1, 2]\n---\n# Odd\n")
    args = Namespace(repo=str(board_repo), dir=None, json=True)
    with pytest.raises(SystemExit, match="1"):
        board_summary(args)
    assert "cards/004.md" in json.loads(capsys.readouterr().err)["error"]
