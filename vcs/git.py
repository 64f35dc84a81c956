"""
Git helpers.

Uses GitPython for repository discovery, status and staging.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Union

import git

from errors import RepositoryNotFoundError, VersionControlError
from graph.identity import RoamFile

logger = logging.getLogger(__name__)

PathLike = Union[str, Path, RoamFile]


class FileStatus(Enum):
    """Working tree status of a single file."""

    UNMODIFIED = "unmodified"
    MODIFIED = "modified"
    IGNORED = "ignored"


def find_git_repo(start: Optional[Path] = None) -> git.Repo:
    """
    Discover the repository containing ``start`` (default: cwd).

    Raises:
        RepositoryNotFoundError: If no working tree is found.
    """
    if start is None:
        start = Path.cwd()
    try:
        repo = git.Repo(start, search_parent_directories=True)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
        raise RepositoryNotFoundError(start) from e
    if repo.bare:
        raise RepositoryNotFoundError(start)
    logger.info("Found git repository at %s", repo.git_dir)
    return repo


def _relative_to_worktree(repo: git.Repo, path: PathLike) -> str:
    workdir = Path(repo.working_tree_dir)
    try:
        return Path(path).relative_to(workdir).as_posix()
    except ValueError:
        raise VersionControlError(f"{path} is outside the working tree {workdir}") from None


def file_status(repo: git.Repo, path: PathLike) -> FileStatus:
    """
    Get the status of one file.

    Untracked, modified and staged files all count as MODIFIED.

    Raises:
        VersionControlError: If the file is outside the working tree or
            git fails.
    """
    relative = _relative_to_worktree(repo, path)
    try:
        output = repo.git.status("--porcelain", "--ignored", "--", relative)
    except git.CommandError as e:
        raise VersionControlError(f"git status failed for {path}: {e}") from e

    lines = [line for line in output.splitlines() if line.strip()]
    if not lines:
        return FileStatus.UNMODIFIED
    if all(line.startswith("!!") for line in lines):
        return FileStatus.IGNORED
    return FileStatus.MODIFIED


def is_modified(repo: git.Repo, path: PathLike) -> bool:
    """True if the file is new or modified. Ignored files are not."""
    return file_status(repo, path) is FileStatus.MODIFIED


def changed_only(repo: git.Repo):
    """
    Build an exclusion predicate that stops the walk at unchanged files.

    If the status of a note cannot be determined, the note is expanded
    anyway.
    """

    def exclude(node: RoamFile) -> bool:
        try:
            return not is_modified(repo, node)
        except VersionControlError as e:
            logger.warning("Could not get git status of %s, expanding it: %s", node, e)
            return False

    return exclude


def stage(repo: git.Repo, paths: Iterable[PathLike]) -> int:
    """
    Add files to the index and write it.

    Returns:
        Number of files staged.

    Raises:
        VersionControlError: If any file cannot be staged.
    """
    relative = [_relative_to_worktree(repo, path) for path in paths]
    if not relative:
        return 0
    index = repo.index
    try:
        index.add(relative)
        index.write()
    except (git.GitError, OSError) as e:
        raise VersionControlError(f"Failed to stage files: {e}") from e
    logger.info("Staged %d file(s)", len(relative))
    return len(relative)
