"""Core workflows for git-helper."""

from .workflow import WorkflowEngine, workflow_action

__all__ = ["WorkflowEngine", "workflow_action"]
