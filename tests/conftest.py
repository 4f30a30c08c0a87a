"""Pytest fixtures for git-helper tests"""
import logging
import tempfile
from pathlib import Path
from typing import Dict, Optional, Tuple
from unittest.mock import Mock

import git
import pytest

from git_helper.config import Config
from git_helper.core import WorkflowEngine
from git_helper.models.command import Command, ExitStatus
from git_helper.services.git import RepositoryQueries
from git_helper.services.runner import RunnerOptions, SubprocessRunner


class RecordingRunner(SubprocessRunner):
    """Runner that records commands instead of executing them.

    failures maps an argv prefix, e.g. ("git", "rebase"), to the exit
    status that commands starting with it should report.
    """

    def __init__(self, failures: Optional[Dict[Tuple[str, ...], int]] = None, options=None):
        super().__init__(options or RunnerOptions())
        self.failures = failures or {}
        self.commands = []

    def execute(self, command: Command) -> ExitStatus:
        self.commands.append(command)
        argv = tuple(command.argv)
        for prefix, returncode in self.failures.items():
            if argv[: len(prefix)] == prefix:
                return ExitStatus(returncode)
        return ExitStatus(0)

    @property
    def git_args(self):
        """Argument tuples of the git commands run so far."""
        return [c.args for c in self.commands if c.program == "git"]

    def ran(self, *args: str) -> bool:
        return any(c.args[: len(args)] == args for c in self.commands if c.program == "git")


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging() replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def default_config():
    return Config()


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def mock_queries():
    """Queries for a clean worktree on feature/work with nothing on the remote."""
    queries = Mock(spec=RepositoryQueries)
    queries.current_branch.return_value = "feature/work"
    queries.show_current_branch.return_value = "feature/work"
    queries.local_branch_exists.return_value = False
    queries.remote_branch_exists.return_value = False
    queries.has_upstream.return_value = False
    queries.has_tracked_changes.return_value = False
    queries.has_commits.return_value = True
    queries.remote_exists.return_value = True
    queries.local_branches.return_value = []
    queries.remote_branch_names.return_value = []
    queries.operation_in_progress.return_value = None
    return queries


@pytest.fixture
def make_engine(temp_dir, runner, mock_queries):
    """Factory for a WorkflowEngine wired to the recording runner and mock queries."""

    def _make(config=None, confirm=None, assume_yes=False, engine_runner=None):
        return WorkflowEngine(
            config or Config(),
            engine_runner or runner,
            mock_queries,
            temp_dir,
            confirm=confirm or Mock(return_value=False),
            assume_yes=assume_yes,
        )

    return _make


def _commit_file(repo: git.Repo, name: str, content: str, message: str) -> None:
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture
def commit_file():
    return _commit_file


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository with one commit on main."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    _commit_file(repo, "README.md", "# Test Repository\n", "Initial commit")

    # Rename master to main if needed
    repo.git.branch('-M', 'main')

    yield repo

    repo.close()


@pytest.fixture
def git_repo_with_origin(git_repo, temp_dir):
    """Repository with a bare origin holding main and dev at the same commit."""
    origin_path = temp_dir / "origin.git"
    origin = git.Repo.init(origin_path, bare=True)

    git_repo.create_remote('origin', str(origin_path))
    git_repo.git.push('origin', 'main')
    git_repo.git.branch('dev')
    git_repo.git.push('origin', 'dev')

    yield git_repo

    origin.close()


@pytest.fixture
def real_engine(git_repo_with_origin):
    """Engine that really runs git in the fixture repository."""

    def _make(config=None, confirm=None, assume_yes=False):
        root = Path(git_repo_with_origin.working_dir)
        return WorkflowEngine(
            config or Config(),
            SubprocessRunner(RunnerOptions(), cwd=root),
            RepositoryQueries(root),
            root,
            confirm=confirm or Mock(return_value=False),
            assume_yes=assume_yes,
        )

    return _make


@pytest.fixture
def other_clone(git_repo_with_origin, temp_dir):
    """A second clone of origin, standing in for a teammate's checkout."""
    clone = git.Repo.clone_from(str(temp_dir / "origin.git"), temp_dir / "other_clone")
    with clone.config_writer() as writer:
        writer.set_value("user", "name", "Other User")
        writer.set_value("user", "email", "other@example.com")
        writer.set_value("commit", "gpgsign", "false")

    yield clone

    clone.close()
