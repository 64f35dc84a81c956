"""
Read-only access to the org-roam SQLite database.

org-roam stores every text column as a printed Lisp string, so file
paths, node ids and link types all carry surrounding double quotes.
"""

import contextlib
import logging
import os
import sqlite3
from pathlib import Path
from typing import Iterator, List

from errors import MalformedStorageKeyError, StoreQueryError
from graph.identity import RoamFile, strip_storage_quotes, to_storage_value

logger = logging.getLogger(__name__)

ID_LINK = to_storage_value("id")
FILE_LINK = to_storage_value("file")

# Files owning the destination of every id link leaving ``src.file``.
REFERENCED_NOTES_QUERY = """
    SELECT dst.file
    FROM nodes AS src
    JOIN links ON links.source = src.id
    JOIN nodes AS dst ON dst.id = links.dest
    JOIN files ON files.file = dst.file
    WHERE src.file = ? AND links.type = ?
    GROUP BY dst.file
    ORDER BY MIN(links.pos), dst.file
"""

REFERENCED_ASSETS_QUERY = """
    SELECT links.dest
    FROM nodes AS src
    JOIN links ON links.source = src.id
    WHERE src.file = ? AND links.type = ?
    GROUP BY links.dest
    ORDER BY MIN(links.pos), links.dest
"""


def connect(db_path: Path) -> sqlite3.Connection:
    """
    Open the database read-only.

    Raises:
        StoreQueryError: If the database cannot be opened.
    """
    uri = Path(db_path).absolute().as_uri() + "?mode=ro"
    try:
        conn = sqlite3.connect(uri, uri=True)
    except sqlite3.Error as e:
        raise StoreQueryError(f"Cannot open database {db_path}: {e}") from e
    logger.info("Connected to database %s", db_path)
    return conn


@contextlib.contextmanager
def open_store(db_path: Path) -> Iterator["NoteStore"]:
    """Yield a NoteStore and close its connection afterwards."""
    with contextlib.closing(connect(db_path)) as conn:
        yield NoteStore(conn)


class NoteStore:
    """Resolves one hop of references for a note file."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def resolve(self, node: RoamFile) -> List[RoamFile]:
        """
        Get the note files referenced by ``node`` through id links.

        A file unknown to the database has no references.

        Raises:
            StoreQueryError: On any database failure or malformed value.
        """
        rows = self._query(REFERENCED_NOTES_QUERY, node, ID_LINK)
        try:
            return [RoamFile.from_storage_key(value) for value in rows]
        except MalformedStorageKeyError as e:
            raise StoreQueryError(f"Bad file entry referenced from {node}: {e}") from e

    def assets(self, node: RoamFile) -> List[Path]:
        """
        Get the files referenced by ``node`` through file links.

        Relative link targets are taken relative to the note's directory.
        Targets missing from disk are skipped.

        Raises:
            StoreQueryError: On any database failure or malformed value.
        """
        assets: List[Path] = []
        for value in self._query(REFERENCED_ASSETS_QUERY, node, FILE_LINK):
            try:
                target = Path(strip_storage_quotes(value))
            except MalformedStorageKeyError as e:
                raise StoreQueryError(f"Bad file link in {node}: {e}") from e

            if not target.is_absolute():
                target = node.path.parent / target
            target = Path(os.path.normpath(target))
            if not target.exists():
                logger.warning("Skipping missing file %s linked from %s", target, node)
                continue
            assets.append(target)
        return assets

    def _query(self, sql: str, node: RoamFile, link_type: str) -> List[str]:
        try:
            cursor = self.conn.execute(sql, (node.to_storage_key(), link_type))
            return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreQueryError(f"Query failed for {node}: {e}") from e
