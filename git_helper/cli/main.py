"""Command-line interface for git-helper"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, Optional

from rich.console import Console
from rich.prompt import Prompt

from git_helper.cli.args import build_parser
from git_helper.config import Config, load_config
from git_helper.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_GITIGNORE_PRESET,
    EXIT_FAILED,
    EXIT_INVALID_ARGS,
    EXIT_SUCCESS,
    MENU_ACTIONS,
    REPO_OPTIONAL_ACTIONS,
)
from git_helper.core import WorkflowEngine
from git_helper.exceptions import ConfigError, GitHelperError
from git_helper.formatters import format_effective_config, format_result, result_style
from git_helper.logging_config import get_logger, setup_logging
from git_helper.models.result import WorkflowResult
from git_helper.services.git import RepositoryQueries, find_repo_root, require_git, try_find_repo_root
from git_helper.services.prompt import console_confirm
from git_helper.services.runner import RunnerOptions, SubprocessRunner

console = Console()
logger = get_logger(__name__)


ActionHandler = Callable[[WorkflowEngine, argparse.Namespace], WorkflowResult]

ACTION_HANDLERS: Dict[str, ActionHandler] = {
    "fetch": lambda engine, args: engine.fetch(),
    "list": lambda engine, args: engine.list_branches(),
    "checkout": lambda engine, args: engine.checkout(args.branch or args.target),
    "newbranch": lambda engine, args: engine.new_branch(args.branch or args.target),
    "commitpush": lambda engine, args: engine.commit_push(args.message or args.target),
    "pull": lambda engine, args: engine.pull(),
    "sync": lambda engine, args: engine.sync(),
    "prune": lambda engine, args: engine.prune(),
    "status": lambda engine, args: engine.status(),
    "upstream": lambda engine, args: engine.ensure_upstream(),
    "init": lambda engine, args: engine.init(),
    "gitignore": lambda engine, args: engine.write_gitignore(args.preset or args.target),
    "firstcommit": lambda engine, args: engine.first_commit(),
    "remote": lambda engine, args: engine.set_remote(args.url or args.target),
    "branch": lambda engine, args: engine.ensure_branch(args.branch or args.target),
    "cleanbranches": lambda engine, args: engine.clean_branches(),
}

# What the menu asks for before running an action
MENU_QUESTIONS: Dict[str, tuple] = {
    "checkout": ("branch", "Branch name"),
    "newbranch": ("branch", "Branch name"),
    "branch": ("branch", "Branch name"),
    "commitpush": ("message", "Commit message"),
    "remote": ("url", "Remote URL"),
    "gitignore": ("preset", "Preset"),
}


def resolve_config(explicit_path: Optional[str], work_dir: Path) -> Config:
    """Load the config file named on the command line, or the one at the repo root.

    Raises:
        ConfigError: If an explicitly named config file does not exist
    """
    if explicit_path:
        path = Path(explicit_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {explicit_path}")
        return load_config(path)
    return load_config(work_dir / CONFIG_FILE_NAME)


def print_help(parser: argparse.ArgumentParser, config: Config) -> None:
    console.print(parser.format_help(), markup=False, highlight=False)
    console.print(format_effective_config(config), markup=False, highlight=False)


def report(result: WorkflowResult) -> None:
    """Print the outcome of an action unless it is a plain success."""
    if result.ok and not result.reason:
        return
    console.print(format_result(result), style=result_style(result), markup=False, highlight=False)


def dispatch(engine: WorkflowEngine, action: str, args: argparse.Namespace) -> WorkflowResult:
    return ACTION_HANDLERS[action](engine, args)


def run_menu(engine: WorkflowEngine, parser: argparse.ArgumentParser) -> int:
    """Interactive loop over the actions until the user picks exit."""
    while True:
        try:
            choice = Prompt.ask("Choose action", choices=list(MENU_ACTIONS), console=console)
        except EOFError:
            # stdin closed, same as choosing exit
            choice = "exit"
        if choice == "exit":
            return EXIT_SUCCESS
        if choice == "help":
            print_help(parser, engine.config)
            continue

        args = argparse.Namespace(branch=None, message=None, url=None, preset=None, target=None)
        if choice in MENU_QUESTIONS:
            field, question = MENU_QUESTIONS[choice]
            default = DEFAULT_GITIGNORE_PRESET if field == "preset" else None
            try:
                answer = Prompt.ask(question, default=default, console=console)
            except EOFError:
                return EXIT_SUCCESS
            setattr(args, field, answer)

        try:
            report(dispatch(engine, choice, args))
        except GitHelperError as e:
            console.print(f"Error: {e}", style="red", markup=False)


def run(parser: argparse.ArgumentParser, parsed_args: argparse.Namespace) -> int:
    """Pre-flight checks, config resolution and dispatch for one invocation."""
    action = parsed_args.action or "help"

    if action != "help":
        require_git()

    cwd = Path.cwd()
    if action in REPO_OPTIONAL_ACTIONS:
        work_dir = try_find_repo_root(cwd) or cwd
    else:
        work_dir = find_repo_root(cwd)

    config = resolve_config(parsed_args.config, work_dir)
    setup_logging(log_level=config.log_level, verbose=parsed_args.verbose)
    logger.debug(f"Repository root: {work_dir}")

    if parsed_args.action is None:
        print_help(parser, config)
        return EXIT_INVALID_ARGS
    if action == "help":
        print_help(parser, config)
        return EXIT_SUCCESS

    runner = SubprocessRunner(
        RunnerOptions(dry_run=parsed_args.dry_run, verbose=parsed_args.verbose), cwd=work_dir
    )
    engine = WorkflowEngine(
        config,
        runner,
        RepositoryQueries(work_dir),
        work_dir,
        confirm=console_confirm,
        assume_yes=parsed_args.yes,
    )

    if action == "menu":
        return run_menu(engine, parser)

    result = dispatch(engine, action, parsed_args)
    report(result)
    return result.exit_code


def main(argv=None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    # Defaults until the config file has been read
    setup_logging(verbose=parsed_args.verbose)

    try:
        return run(parser, parsed_args)
    except GitHelperError as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        return e.exit_code
    except Exception as e:
        console.print(f"Error: {e}", style="red", markup=False, highlight=False)
        if parsed_args.verbose:
            console.print_exception()
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
