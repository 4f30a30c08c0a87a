"""Git-related services for git-helper."""

from .environment import find_repo_root, require_git, try_find_repo_root
from .queries import RepositoryQueries

__all__ = [
    "RepositoryQueries",
    "find_repo_root",
    "require_git",
    "try_find_repo_root",
]
