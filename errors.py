"""
Exception hierarchy for roamdeps.

Every error raised on purpose inherits from RoamDepsError so the CLI can
report it uniformly and exit non-zero.
"""


class RoamDepsError(Exception):
    """Base exception for all roamdeps errors."""


class UnresolvablePathError(RoamDepsError):
    """A path could not be turned into an absolute file identity."""

    def __init__(self, path, reason: str = "no such file"):
        self.path = path
        super().__init__(f"Cannot resolve '{path}': {reason}")


class MalformedStorageKeyError(RoamDepsError):
    """A value read from the database is not a quoted path."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Malformed storage key: {value!r}")


class StoreQueryError(RoamDepsError):
    """Any failure talking to the org-roam database."""


class DatabaseNotFoundError(RoamDepsError):
    """No org-roam database at the resolved or supplied location."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Org-roam database not found at {path}")


class RepositoryNotFoundError(RoamDepsError):
    """No git working tree could be discovered."""

    def __init__(self, start):
        self.start = start
        super().__init__(f"No git repository found at or above {start}")


class VersionControlError(RoamDepsError):
    """Git status or staging failed."""


class ConfigError(RoamDepsError):
    """Config file is unreadable or invalid."""
