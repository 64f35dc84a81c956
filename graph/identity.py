"""File identity for notes in the org-roam database."""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from errors import MalformedStorageKeyError, UnresolvablePathError


@dataclass(frozen=True)
class RoamFile:
    """
    A file known to org-roam, always as an absolute path.

    Two RoamFiles are equal (and hash equal) iff their paths are equal,
    which is what the closure relies on for deduplication.

    The database stores paths wrapped in double quotes, so the storage
    form differs from the display form; see ``to_storage_key`` and
    ``from_storage_key``.
    """

    path: Path

    @classmethod
    def normalize(cls, raw: Union[str, Path]) -> "RoamFile":
        """
        Build a RoamFile from user input or a database value.

        Absolute paths are taken verbatim. Relative paths are resolved
        against the current directory and must exist.

        Raises:
            UnresolvablePathError: If a relative path cannot be resolved.
        """
        if not str(raw):
            raise UnresolvablePathError(raw, "empty path")
        path = Path(raw)
        if path.is_absolute():
            return cls(path)
        try:
            return cls(path.resolve(strict=True))
        except (OSError, RuntimeError) as e:
            raise UnresolvablePathError(raw, getattr(e, "strerror", None) or str(e)) from e

    def to_storage_key(self) -> str:
        """Return the quoted form used as a lookup key in the database."""
        return f'"{self.path}"'

    @classmethod
    def from_storage_key(cls, value: str) -> "RoamFile":
        """
        Decode a quoted database value.

        Exactly one leading and one trailing quote are stripped.

        Raises:
            MalformedStorageKeyError: If either quote is missing.
        """
        return cls.normalize(strip_storage_quotes(value))

    def __str__(self) -> str:
        return str(self.path)

    def __fspath__(self) -> str:
        return str(self.path)


def strip_storage_quotes(value: str) -> str:
    """Remove the surrounding quote pair from a stored string."""
    if not isinstance(value, str) or len(value) < 2:
        raise MalformedStorageKeyError(value)
    if not (value.startswith('"') and value.endswith('"')):
        raise MalformedStorageKeyError(value)
    return value[1:-1]


def to_storage_value(value: str) -> str:
    """Quote a plain string the way the database stores it."""
    return f'"{value}"'
