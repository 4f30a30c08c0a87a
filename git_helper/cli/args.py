"""Command-line argument parsing for git-helper."""

import argparse

from git_helper.__version__ import __version__
from git_helper.constants import ACTION_HELP, ACTIONS, HELP_EXAMPLES


def _actions_epilog() -> str:
    lines = ["Actions:"]
    for action in ACTIONS:
        lines.append(f"  {action:<15} {ACTION_HELP[action]}")
    return "\n".join(lines) + "\n" + HELP_EXAMPLES


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="githelper",
        description="Safe, consistent git workflows with protected-branch guard rails",
        epilog=_actions_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("action", nargs="?", choices=ACTIONS, metavar="action", help="Action to run")
    parser.add_argument(
        "target",
        nargs="?",
        help="Branch name, commit message, remote URL or preset, depending on the action",
    )
    parser.add_argument("--version", action="version", version=f"githelper {__version__}")
    parser.add_argument("-b", "--branch", "-n", "--name", dest="branch", help="Branch name")
    parser.add_argument("-m", "--message", help="Commit message")
    parser.add_argument("--url", help="Remote URL (remote)")
    parser.add_argument("-p", "--preset", help="Preset for gitignore: python, ruby, node, minimal")
    parser.add_argument("-y", "--yes", action="store_true", help="Auto-confirm")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug output, echo each command")
    parser.add_argument("--dry-run", action="store_true", help="Show commands only")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Config file to use instead of .githelper.json at the repository root",
    )
    return parser


def parse_args(argv=None):
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
