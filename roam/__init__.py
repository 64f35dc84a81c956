"""Access to the org-roam note database."""

from .discovery import resolve_db_path, default_db_path
from .store import NoteStore, connect, open_store

__all__ = [
    "resolve_db_path",
    "default_db_path",
    "NoteStore",
    "connect",
    "open_store",
]
