"""Formatting helpers for CLI output"""
from typing import Any

from git_helper.config import Config
from git_helper.models.result import Outcome, WorkflowResult


def format_value(value: Any) -> str:
    """Render a config value the way it is shown in the help output."""
    if value is None:
        return "(none)"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (tuple, list)):
        return " ".join(str(item) for item in value)
    return str(value)


def format_effective_config(config: Config) -> str:
    lines = ["Effective config:"]
    for key, value in config.to_dict().items():
        lines.append(f"  {key}: {format_value(value)}")
    return "\n".join(lines)


def result_style(result: WorkflowResult) -> str:
    """Rich style for reporting a result."""
    if result.outcome is Outcome.SUCCESS:
        return "green"
    if result.outcome is Outcome.BLOCKED:
        return "yellow"
    return "red"


def format_result(result: WorkflowResult) -> str:
    if result.outcome is Outcome.BLOCKED:
        return f"Blocked: {result.reason}"
    if result.outcome is Outcome.CONFLICT:
        return f"Conflict: {result.reason}"
    if result.outcome is Outcome.FAILED:
        return f"Failed: {result.reason}"
    return result.reason or "Done"
