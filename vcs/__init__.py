"""Version control (git) integration."""

from .git import FileStatus, changed_only, file_status, find_git_repo, is_modified, stage

__all__ = [
    "FileStatus",
    "changed_only",
    "file_status",
    "find_git_repo",
    "is_modified",
    "stage",
]
