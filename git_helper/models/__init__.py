"""Value objects shared by the runner and the workflow engine."""

from .command import Command, ExitStatus
from .result import Outcome, WorkflowResult

__all__ = ["Command", "ExitStatus", "Outcome", "WorkflowResult"]
