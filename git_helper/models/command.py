"""Command and exit status models"""
import shlex
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Command:
    """A program plus its argument vector. Never run through a shell."""
    program: str
    args: Tuple[str, ...] = ()

    @classmethod
    def git(cls, *args: str) -> "Command":
        """Build a git command, e.g. ``Command.git("fetch", "--all")``."""
        return cls("git", tuple(str(arg) for arg in args))

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def display(self) -> str:
        """Shell-quoted command line for echoing to the user."""
        return shlex.join(self.argv)

    def __str__(self) -> str:
        return self.display()


@dataclass(frozen=True)
class ExitStatus:
    """Exit status of an executed (or dry-run) command."""
    returncode: int
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return self.returncode == 0
