"""Locating the org-roam database on disk."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from errors import DatabaseNotFoundError

logger = logging.getLogger(__name__)

DB_ENV_VAR = "ROAMDEPS_DB"
DEFAULT_DB_RELATIVE = Path(".emacs.d") / ".local" / "cache" / "org-roam.db"


def default_db_path(home: Optional[Path] = None) -> Path:
    """Return the database location used by a Doom Emacs setup."""
    if home is None:
        home = Path.home()
    return home / DEFAULT_DB_RELATIVE


def resolve_db_path(
    override: Optional[Union[str, Path]] = None,
    home: Optional[Path] = None,
) -> Path:
    """
    Find the org-roam database.

    Tries, in order:
    1. The explicit ``override`` (CLI flag or config file).
    2. The ROAMDEPS_DB environment variable.
    3. ~/.emacs.d/.local/cache/org-roam.db

    Args:
        override: Database path supplied by the caller.
        home: Home directory to use for the default location.

    Returns:
        Absolute path of an existing database file.

    Raises:
        DatabaseNotFoundError: If the chosen location has no file.
    """
    if override:
        candidate = Path(override).expanduser()
    elif os.environ.get(DB_ENV_VAR):
        candidate = Path(os.environ[DB_ENV_VAR]).expanduser()
    else:
        candidate = default_db_path(home)

    candidate = candidate.absolute()
    if not candidate.is_file():
        raise DatabaseNotFoundError(candidate)

    logger.debug("Resolved org-roam database to %s", candidate)
    return candidate
