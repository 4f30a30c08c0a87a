"""Pre-flight checks run before any action."""

import git
import shutil
from pathlib import Path
from typing import Optional, Union

from git_helper.exceptions import GitNotFoundError, NotARepositoryError
from git_helper.logging_config import get_logger

logger = get_logger(__name__)


def require_git() -> str:
    """Return the path of the git executable.

    Raises:
        GitNotFoundError: If git is not on PATH
    """
    executable = shutil.which("git")
    if executable is None:
        raise GitNotFoundError()
    logger.debug(f"Using git at {executable}")
    return executable


def find_repo_root(start: Union[str, Path]) -> Path:
    """Return the top level of the working tree containing start.

    Raises:
        NotARepositoryError: If start is not inside a git working tree
    """
    try:
        repo = git.Repo(start, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise NotARepositoryError(str(start)) from e

    try:
        if repo.working_tree_dir is None:
            raise NotARepositoryError(str(start))
        return Path(repo.working_tree_dir)
    finally:
        repo.close()


def try_find_repo_root(start: Union[str, Path]) -> Optional[Path]:
    """Like find_repo_root, but None when there is no repository."""
    try:
        return find_repo_root(start)
    except NotARepositoryError:
        return None
