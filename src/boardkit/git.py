"""Git repository access and boardkit configuration."""

from pathlib import Path
from typing import Any

from git import InvalidGitRepositoryError, NoSuchPathError, Repo

SECTION = "boardkit"

DEFAULTS: dict[str, Any] = {
    "dir": ".",
    "view": "",
    "commit": False,
}


def _coerce(key: str, raw: str) -> Any:
    """Type-coerce a raw config value using the type of its default."""
    default = DEFAULTS.get(key)
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    return raw


def open_repo(path: str | Path) -> Repo | None:
    """Open the git repository containing path, or None outside one."""
    try:
        return Repo(path, search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        return None


def is_git_repo(path: str | Path) -> bool:
    """Check if path is inside a git repository."""
    return open_repo(path) is not None


def read_config(repo_path: str | Path) -> dict[str, Any]:
    """Read the [boardkit] git config section merged over DEFAULTS.

    Keys are git-style ("dir", "view", "commit"). Unknown keys are
    passed through as strings. Outside a repository only the
    defaults are returned.
    """
    config = dict(DEFAULTS)
    repo = open_repo(repo_path)
    if repo is None:
        return config
    reader = repo.config_reader()
    if not reader.has_section(SECTION):
        return config
    for key, raw in reader.items(SECTION):
        config[key] = _coerce(key, raw)
    return config


def current_user(repo_path: str | Path) -> str:
    """The configured git user email, or "" if unset or outside a repo."""
    repo = open_repo(repo_path)
    if repo is None:
        return ""
    return str(repo.config_reader().get_value("user", "email", ""))


def write_config_key(repo_path: str | Path, key: str, value: Any) -> None:
    """Write one [boardkit] key to the repository's git config."""
    repo = Repo(repo_path)
    writer = repo.config_writer("repository")
    try:
        writer.set_value(SECTION, key, str(value).lower() if isinstance(value, bool) else str(value))
    finally:
        writer.release()


def file_times(repo: Repo, rev: str, path: str) -> tuple[int, int] | None:
    """Return (added, last_changed) author times of path at rev in epoch ms.

    None if path has no history at rev.
    """
    commits = list(repo.iter_commits(rev, paths=path))
    if not commits:
        return None
    return commits[-1].authored_date * 1000, commits[0].authored_date * 1000
