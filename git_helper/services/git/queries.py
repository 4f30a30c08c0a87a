"""Read-only repository queries for git-helper."""

import git
from pathlib import Path
from typing import List, Optional, Union

from git_helper.logging_config import get_logger

logger = get_logger(__name__)


class RepositoryQueries:
    """Service for read-only questions about the repository.

    Nothing here changes refs, the index or the worktree, so these checks
    run in dry-run mode too. Mutations always go through the runner.
    """

    def __init__(self, repo_path: Union[str, Path]):
        """Initialize the queries service.

        Args:
            repo_path: Path to the repository root
        """
        self.repo_path = str(repo_path)

    def _get_repo(self) -> git.Repo:
        """Get a fresh git.Repo instance.

        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def current_branch(self) -> str:
        """Name of the checked-out branch, or "HEAD" when detached."""
        try:
            return self._get_repo().git.rev_parse("--abbrev-ref", "HEAD").strip()
        except git.exc.GitCommandError:
            # Unborn branch: HEAD names a branch with no commits yet
            return self.show_current_branch() or "HEAD"

    def show_current_branch(self) -> str:
        """Name of the checked-out branch, or "" when detached.

        Unlike current_branch() this also works on an unborn branch.
        """
        try:
            return self._get_repo().git.branch("--show-current").strip()
        except git.exc.GitCommandError as e:
            logger.debug(f"Could not determine current branch: {e}")
            return ""

    def local_branch_exists(self, branch_name: str) -> bool:
        """Check if refs/heads/<branch_name> exists."""
        try:
            self._get_repo().git.show_ref("--verify", "--quiet", f"refs/heads/{branch_name}")
            return True
        except git.exc.GitCommandError:
            return False

    def remote_branch_exists(self, remote_name: str, branch_name: str) -> bool:
        """Check if the remote advertises a head named branch_name."""
        try:
            self._get_repo().git.ls_remote(
                "--exit-code", "--heads", remote_name, f"refs/heads/{branch_name}"
            )
            return True
        except git.exc.GitCommandError as e:
            logger.debug(f"No remote branch {remote_name}/{branch_name}: {e.status}")
            return False

    def has_upstream(self) -> bool:
        """Check if the current branch has an upstream configured."""
        try:
            self._get_repo().git.rev_parse("--abbrev-ref", "--symbolic-full-name", "@{u}")
            return True
        except git.exc.GitCommandError:
            return False

    def has_tracked_changes(self) -> bool:
        """Check for uncommitted changes to tracked files.

        Untracked files are ignored: a plain ``git stash`` would not save
        them, and a stash that was never created must not be popped.
        """
        status = self._get_repo().git.status("--porcelain", "--untracked-files=no")
        return bool(status.strip())

    def has_commits(self) -> bool:
        """Check if HEAD points at a commit."""
        try:
            self._get_repo().git.rev_parse("--verify", "HEAD")
            return True
        except git.exc.GitCommandError:
            return False

    def remote_exists(self, remote_name: str) -> bool:
        """Check if a remote with this name is configured."""
        return remote_name in [remote.name for remote in self._get_repo().remotes]

    def local_branches(self) -> List[str]:
        """Names of all local branches."""
        return [head.name for head in self._get_repo().heads]

    def remote_branch_names(self) -> List[str]:
        """Remote-tracking branch names with the remote prefix stripped.

        ``origin/feature/x`` becomes ``feature/x``; symbolic refs such as
        ``origin/HEAD`` are skipped.
        """
        output = self._get_repo().git.branch("-r", "--format=%(refname:short)")
        names = []
        for line in output.split("\n"):
            line = line.strip()
            if not line or "/" not in line:
                continue
            name = line.split("/", 1)[1]
            if name != "HEAD" and name not in names:
                names.append(name)
        return names

    def operation_in_progress(self) -> Optional[str]:
        """Return "rebase" or "merge" if one was left stopped, else None."""
        git_dir = Path(self._get_repo().git_dir)
        if (git_dir / "rebase-merge").is_dir() or (git_dir / "rebase-apply").is_dir():
            return "rebase"
        if (git_dir / "MERGE_HEAD").is_file():
            return "merge"
        return None
