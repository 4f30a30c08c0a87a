"""Custom exceptions for git-helper"""

from typing import Optional, TYPE_CHECKING

from git_helper.constants import (
    EXIT_CONFIG_ERROR,
    EXIT_FAILED,
    EXIT_GIT_NOT_FOUND,
    EXIT_INVALID_ARGS,
)

if TYPE_CHECKING:
    from git_helper.models.command import Command


class GitHelperError(Exception):
    """Base exception for all git-helper errors."""

    exit_code = EXIT_FAILED


class InvalidArgumentError(GitHelperError):
    """Raised when a required argument is missing or a branch name is rejected."""

    exit_code = EXIT_INVALID_ARGS


class ConfigError(GitHelperError):
    """Raised when a configuration value or file cannot be used."""

    exit_code = EXIT_CONFIG_ERROR


class GitEnvironmentError(GitHelperError):
    """Raised by pre-flight checks before any action runs."""

    exit_code = EXIT_GIT_NOT_FOUND


class GitNotFoundError(GitEnvironmentError):
    """Exception raised when the git executable cannot be found."""

    def __init__(self, program: str = "git"):
        self.program = program
        super().__init__(f"{program} not found")


class NotARepositoryError(GitEnvironmentError):
    """Exception raised when no repository root can be found."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Not a git repo: {path}")


class GitOperationError(GitHelperError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class CommandFailedError(GitOperationError):
    """Exception raised when an executed command exits nonzero."""

    def __init__(self, command: "Command", returncode: int):
        self.command = command
        self.returncode = returncode
        super().__init__(
            command.args[0] if command.args else command.program,
            message=f"'{command.display()}' exited with status {returncode}",
        )


class DetachedHeadError(GitOperationError):
    """Exception raised when repository is in detached HEAD state."""

    def __init__(self):
        super().__init__("check_state", message="Repository is in detached HEAD state")
