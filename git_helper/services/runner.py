"""Subprocess execution for side-effecting commands"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from rich.console import Console

from git_helper.exceptions import CommandFailedError, GitNotFoundError, GitOperationError
from git_helper.logging_config import get_logger
from git_helper.models.command import Command, ExitStatus

console = Console()
logger = get_logger(__name__)


@dataclass(frozen=True)
class RunnerOptions:
    """Execution modes for the runner."""
    dry_run: bool = False  # Print commands, execute nothing
    verbose: bool = False  # Print each command before it runs


class SubprocessRunner:
    """Runs commands synchronously with the parent's stdin/stdout/stderr.

    Commands are passed as argument vectors, never through a shell, so
    branch names and commit messages are not reinterpreted. Streams are
    inherited so that editors and credential prompts opened by git work
    as if git had been run directly.
    """

    def __init__(self, options: Optional[RunnerOptions] = None, cwd: Union[str, Path, None] = None):
        """Initialize the runner.

        Args:
            options: Dry-run / verbose modes (defaults to neither)
            cwd: Working directory for every command (normally the repo root)
        """
        self.options = options or RunnerOptions()
        self.cwd = str(cwd) if cwd is not None else None

    def execute(self, command: Command) -> ExitStatus:
        """Execute a command and return its exit status without interpreting it."""
        if self.options.verbose or self.options.dry_run:
            console.print(f"$ {command.display()}", markup=False, highlight=False)

        if self.options.dry_run:
            return ExitStatus(0, dry_run=True)

        logger.debug(f"Running: {command.display()}")
        try:
            completed = subprocess.run(command.argv, cwd=self.cwd, check=False)
        except FileNotFoundError as e:
            if command.program == "git":
                raise GitNotFoundError() from e
            raise GitOperationError(command.program, message=f"{command.program} not found") from e
        except PermissionError as e:
            raise GitOperationError(command.program, message=f"{command.program} is not executable") from e

        if completed.returncode != 0:
            logger.debug(f"'{command.display()}' exited with status {completed.returncode}")
        return ExitStatus(completed.returncode)

    def run(self, command: Command) -> ExitStatus:
        """Execute a command, raising CommandFailedError on a nonzero exit."""
        status = self.execute(command)
        if not status.ok:
            raise CommandFailedError(command, status.returncode)
        return status
