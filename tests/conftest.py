"""Shared fixtures: a sample property schema, cards and on-disk boards."""

import pytest
from git import Repo

from boardkit.models import (
    Board,
    BoardView,
    Card,
    FilterClause,
    FilterGroup,
    PropertyOption,
    PropertyTemplate,
)
from boardkit.writer import write_board, write_card, write_view

DAY = 24 * 60 * 60 * 1000
# 2024-03-01T00:00:00Z
MARCH_1 = 1709251200000


@pytest.fixture
def templates():
    """One template per property type the filters and grouping care about."""
    return [
        PropertyTemplate(
            id="status",
            name="Status",
            type="select",
            options=(
                PropertyOption(id="todo", value="To Do", color="red"),
                PropertyOption(id="doing", value="Doing", color="yellow"),
                PropertyOption(id="done", value="Done", color="green"),
            ),
        ),
        PropertyTemplate(
            id="tags",
            name="Tags",
            type="multiSelect",
            options=(
                PropertyOption(id="bug", value="Bug", color="red"),
                PropertyOption(id="ui", value="UI", color="blue"),
            ),
        ),
        PropertyTemplate(id="owner", name="Owner", type="person"),
        PropertyTemplate(id="reviewers", name="Reviewers", type="multiPerson"),
        PropertyTemplate(id="due", name="Due", type="date"),
        PropertyTemplate(id="created", name="Created", type="createdTime"),
        PropertyTemplate(id="updated", name="Updated", type="updatedTime"),
        PropertyTemplate(id="author", name="Author", type="createdBy"),
        PropertyTemplate(id="editor", name="Editor", type="updatedBy"),
        PropertyTemplate(id="related", name="Related", type="card"),
        PropertyTemplate(id="notes", name="Notes", type="text"),
    ]


@pytest.fixture
def cards():
    """A handful of cards covering empty, single and multi values."""
    return [
        Card(
            id="001",
            title="Fix login bug",
            created_by="alice",
            modified_by="bob",
            create_at=MARCH_1 + 9 * 60 * 60 * 1000,
            update_at=MARCH_1 + 2 * DAY,
            properties={
                "status": "todo",
                "tags": ["ui", "bug"],
                "owner": "alice",
                "reviewers": ["carol", "bob"],
                "due": str(MARCH_1),
                "related": "b2|c9:Login epic",
                "notes": "Happens on Safari",
            },
        ),
        Card(
            id="002",
            title="Write docs",
            created_by="bob",
            modified_by="bob",
            create_at=MARCH_1 + DAY,
            update_at=MARCH_1 + DAY,
            properties={
                "status": "done",
                "tags": ["bug", "ui"],
                "owner": "bob",
                "reviewers": ["bob", "carol"],
                "due": f'{{"from": {MARCH_1}, "to": {MARCH_1 + 7 * DAY}}}',
            },
        ),
        Card(
            id="003",
            title="Triage",
            created_by="alice",
            modified_by="alice",
            create_at=MARCH_1 + 3 * DAY,
            update_at=MARCH_1 + 3 * DAY,
            properties={},
        ),
    ]


@pytest.fixture
def board(templates):
    return Board(
        id="b1",
        title="Roadmap",
        description="Quarterly roadmap.",
        properties={"color": "blue"},
        card_properties=templates,
    )


@pytest.fixture
def board_dir(tmp_path, board, cards):
    """A board written to a plain directory, with two views."""
    path = tmp_path / "board"
    write_board(path, board)
    for card in cards:
        write_card(path, card)
    write_view(
        path,
        BoardView(
            id="open",
            title="Open work",
            group_by_id="status",
            visible_option_ids=["todo", "doing"],
            hidden_option_ids=["done"],
            filter=FilterGroup(
                operation="and",
                filters=[FilterClause(property_id="status", condition="notIncludes", values=["done"])],
            ),
        ),
    )
    write_view(
        path,
        BoardView(
            id="mine",
            title="Alice's todo",
            filter=FilterGroup(
                operation="and",
                filters=[
                    FilterClause(property_id="status", condition="includes", values=["todo"]),
                    FilterClause(property_id="owner", condition="includes", values=["alice"]),
                ],
            ),
        ),
    )
    return path


@pytest.fixture
def board_repo(board_dir):
    """The board directory committed as the first commit of a git repo."""
    repo = Repo.init(board_dir)
    repo.git.add("-A")
    repo.index.commit("Initial board")
    return board_dir
