"""Workflow result model"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from git_helper.constants import EXIT_BLOCKED, EXIT_FAILED, EXIT_SUCCESS


class Outcome(Enum):
    """How a workflow action ended."""
    SUCCESS = "success"
    BLOCKED = "blocked"  # Protected branch and confirmation declined
    CONFLICT = "conflict"  # Rebase/merge stopped on conflicts
    FAILED = "failed"  # An underlying command exited nonzero


_EXIT_CODES = {
    Outcome.SUCCESS: EXIT_SUCCESS,
    Outcome.BLOCKED: EXIT_BLOCKED,
    Outcome.CONFLICT: EXIT_FAILED,
    Outcome.FAILED: EXIT_FAILED,
}


@dataclass(frozen=True)
class WorkflowResult:
    """Outcome of a single workflow action, used to pick the process exit code."""
    outcome: Outcome
    reason: Optional[str] = None
    returncode: Optional[int] = None  # Exit status of the failing command

    @classmethod
    def success(cls, reason: Optional[str] = None) -> "WorkflowResult":
        return cls(Outcome.SUCCESS, reason)

    @classmethod
    def blocked(cls, reason: str) -> "WorkflowResult":
        return cls(Outcome.BLOCKED, reason)

    @classmethod
    def conflict(cls, reason: str, returncode: Optional[int] = None) -> "WorkflowResult":
        return cls(Outcome.CONFLICT, reason, returncode)

    @classmethod
    def failed(cls, reason: str, returncode: Optional[int] = None) -> "WorkflowResult":
        return cls(Outcome.FAILED, reason, returncode)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self.outcome]
