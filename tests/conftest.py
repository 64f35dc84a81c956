"""Shared fixtures: org-roam databases and git repositories on disk."""

import sqlite3
from pathlib import Path

import git
import pytest


ROAM_SCHEMA = [
    """CREATE TABLE files (file UNIQUE PRIMARY KEY, title, hash NOT NULL,
                           atime NOT NULL, mtime NOT NULL)""",
    """CREATE TABLE nodes (id NOT NULL PRIMARY KEY, file NOT NULL, level NOT NULL,
                           pos NOT NULL, todo, priority, scheduled text, deadline text,
                           title, properties, olp,
                           FOREIGN KEY (file) REFERENCES files (file) ON DELETE CASCADE)""",
    """CREATE TABLE links (pos NOT NULL, source NOT NULL, dest NOT NULL, type NOT NULL,
                           properties NOT NULL,
                           FOREIGN KEY (source) REFERENCES nodes (id) ON DELETE CASCADE)""",
]


def quoted(value) -> str:
    return f'"{value}"'


class RoamDB:
    """Builds a small org-roam database the way org-roam stores it."""

    def __init__(self, path: Path):
        self.path = path
        self.conn = sqlite3.connect(str(path))
        for statement in ROAM_SCHEMA:
            self.conn.execute(statement)
        self.conn.commit()
        self._pos = 0

    def add_note(self, file: Path, node_id=None) -> str:
        """Register ``file`` with one node and return the node id."""
        node_id = node_id or f"id-{file.stem}"
        self.conn.execute(
            "INSERT OR IGNORE INTO files VALUES (?, ?, ?, ?, ?)",
            (quoted(file), quoted(file.stem), quoted("hash"), "(0 0)", "(0 0)"),
        )
        self.conn.execute(
            "INSERT INTO nodes (id, file, level, pos, title) VALUES (?, ?, 0, 1, ?)",
            (quoted(node_id), quoted(file), quoted(file.stem)),
        )
        self.conn.commit()
        return node_id

    def link(self, source_id: str, dest: str, link_type: str = "id") -> None:
        """Record a link; ``dest`` is a node id or, for file links, a path."""
        self._pos += 1
        self.conn.execute(
            "INSERT INTO links VALUES (?, ?, ?, ?, ?)",
            (self._pos, quoted(source_id), quoted(dest), quoted(link_type), "nil"),
        )
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user config and environment out of the tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("ROAMDEPS_DB", raising=False)
    monkeypatch.delenv("ROAMDEPS_LOG_LEVEL", raising=False)


@pytest.fixture
def roam_db(tmp_path):
    db = RoamDB(tmp_path / "org-roam.db")
    yield db
    db.close()


@pytest.fixture
def git_repo(tmp_path):
    """An empty repository with a committer identity."""
    repo = git.Repo.init(tmp_path / "repo")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
    yield repo
    repo.close()


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def commit_all(repo: git.Repo, message: str = "commit") -> None:
    repo.git.add(A=True)
    repo.index.commit(message)
