"""Workflow engine for git-helper

Every action is a short sequence of guarded commands: validation first,
then the protected-branch gate, then the commands themselves. A command
that fails aborts the action; nothing already done is rolled back.
"""

import functools
from pathlib import Path
from typing import Optional, Union

from rich.console import Console

from git_helper.config import Config
from git_helper.constants import (
    DEFAULT_GITIGNORE_PRESET,
    GITIGNORE_FALLBACK,
    GITIGNORE_PRESETS,
    INITIAL_COMMIT_MESSAGE,
    REMEDIATION_TEMPLATE,
)
from git_helper.exceptions import CommandFailedError, DetachedHeadError, InvalidArgumentError
from git_helper.logging_config import get_logger
from git_helper.models.command import Command, ExitStatus
from git_helper.models.result import WorkflowResult
from git_helper.services.branch_policy import PRUNE, SYNC, BranchPolicy
from git_helper.services.git import RepositoryQueries, try_find_repo_root
from git_helper.services.prompt import Confirmer, console_confirm
from git_helper.services.runner import SubprocessRunner

console = Console()
logger = get_logger(__name__)


def _say(message: str, style: Optional[str] = None) -> None:
    """Print user-facing text verbatim (branch names may contain markup characters)."""
    console.print(message, style=style, markup=False, highlight=False)


def workflow_action(method):
    """Turn a failed command inside an action into a FAILED result."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs) -> WorkflowResult:
        try:
            return method(self, *args, **kwargs)
        except CommandFailedError as e:
            logger.debug(f"{method.__name__} aborted: {e}")
            return WorkflowResult.failed(
                f"Command failed: {e.command.display()} (exit {e.returncode})", e.returncode
            )

    return wrapper


class WorkflowEngine:
    """Guard-railed git workflows for a single repository."""

    def __init__(
        self,
        config: Config,
        runner: SubprocessRunner,
        queries: RepositoryQueries,
        repo_root: Union[str, Path],
        confirm: Confirmer = console_confirm,
        assume_yes: bool = False,
    ):
        """Initialize the engine.

        Args:
            config: Effective configuration for this run
            runner: Executes side-effecting commands
            queries: Read-only repository checks
            repo_root: Repository root (or the working directory for init/gitignore)
            confirm: Asked before guarded actions on protected branches
            assume_yes: Treat every confirmation as accepted (--yes)
        """
        self.config = config
        self.runner = runner
        self.queries = queries
        self.repo_root = Path(repo_root)
        self.confirm = confirm
        self.assume_yes = assume_yes

    @property
    def dry_run(self) -> bool:
        return self.runner.options.dry_run

    @property
    def base_ref(self) -> str:
        """Remote-tracking ref of the trunk, e.g. origin/dev."""
        return f"{self.config.remote_name}/{self.config.default_base}"

    # ---------------------------------------------------------------- helpers

    def _git(self, *args: str) -> ExitStatus:
        return self.runner.run(Command.git(*args))

    def _validated_branch_name(self, branch_name: Optional[str]) -> str:
        """Return the stripped name, or raise InvalidArgumentError."""
        if branch_name is None or not branch_name.strip():
            raise InvalidArgumentError("No branch specified")
        branch_name = branch_name.strip()
        if not BranchPolicy.has_allowed_prefix(branch_name, self.config):
            raise InvalidArgumentError(BranchPolicy.prefix_hint(self.config))
        return branch_name

    def _attached_branch(self) -> str:
        branch = self.queries.current_branch()
        if branch == "HEAD":
            raise DetachedHeadError()
        return branch

    def _confirmation_gate(self, action: str, branch: str) -> Optional[WorkflowResult]:
        """Return a BLOCKED result if the action needs a confirmation that is refused."""
        if not BranchPolicy.requires_confirmation(action, branch, self.config):
            return None
        if self.assume_yes:
            logger.debug(f"{action} on protected branch {branch} confirmed by --yes")
            return None
        if self.confirm(f"{action.capitalize()} on protected branch {branch}. Continue?"):
            return None

        reason = f"{action.capitalize()} on protected branch '{branch}' was not confirmed"
        logger.info(reason)
        return WorkflowResult.blocked(reason)

    def _stash_if_dirty(self) -> bool:
        """Stash tracked changes when autoStash is on. Returns True if stashed."""
        if not self.config.auto_stash or not self.queries.has_tracked_changes():
            return False
        logger.info("Stashing local changes")
        self._git("stash")
        return True

    def _restore_stash(self) -> None:
        status = self.runner.execute(Command.git("stash", "pop"))
        if not status.ok:
            logger.warning("Could not restore stashed changes")
            _say("Your changes are still in the stash. Run 'git stash pop' manually.", "yellow")

    def _report_conflict(self, verb: str) -> None:
        logger.error(f"{verb} stopped with conflicts")
        _say(REMEDIATION_TEMPLATE.format(verb=verb), "red")

    def _recover_from_conflict(self, verb: str, stashed: bool) -> None:
        """Report a stopped rebase/merge and apply the stash policy.

        git cannot pop a stash onto unmerged paths, so restoring the
        stashed changes means aborting the stopped operation first. Without
        a stash (or with restoreStashOnFailure off) the operation is left
        for the user to finish.
        """
        if stashed and self.config.restore_stash_on_failure:
            logger.error(f"{verb} stopped with conflicts, aborting to restore local changes")
            if self.runner.execute(Command.git(verb, "--abort")).ok:
                _say(
                    f"Conflicts detected. The {verb} was aborted and your local changes restored.\n"
                    f"Commit or stash them, then run it again to resolve the conflicts.",
                    "red",
                )
                self._restore_stash()
                return
            logger.warning(f"git {verb} --abort failed")

        self._report_conflict(verb)
        if stashed:
            _say(
                f"Your local changes were left in the stash. "
                f"Run 'git stash pop' once the {verb} is finished.",
                "yellow",
            )

    def _run_pre_commit_checks(self) -> bool:
        """Run the configured pre-commit hook. A missing hook passes."""
        hook = self.config.pre_commit_hook
        if not hook:
            return True
        hook_path = self.repo_root / hook
        if not hook_path.is_file():
            logger.debug(f"Pre-commit hook {hook} not found, skipping checks")
            return True
        logger.info(f"Running pre-commit checks: {hook}")
        return self.runner.execute(Command(str(hook_path))).ok

    # ---------------------------------------------------------------- actions

    @workflow_action
    def fetch(self) -> WorkflowResult:
        logger.info("Fetching all remotes...")
        self._git("fetch", "--all", "--prune")
        return WorkflowResult.success()

    @workflow_action
    def list_branches(self) -> WorkflowResult:
        logger.info("Local branches:")
        self._git("branch")
        logger.info("Remote branches:")
        self._git("branch", "-r")
        return WorkflowResult.success()

    @workflow_action
    def checkout(self, branch_name: Optional[str]) -> WorkflowResult:
        """Switch to a branch, creating it if needed.

        Resolution order: an existing local branch, then a branch on the
        remote (tracked locally), then a new branch from the trunk.
        """
        branch_name = self._validated_branch_name(branch_name)
        remote = self.config.remote_name

        if self.queries.local_branch_exists(branch_name):
            logger.info(f"Checking out local branch {branch_name}")
            self._git("checkout", branch_name)
        elif self.queries.remote_branch_exists(remote, branch_name):
            logger.info(f"Creating tracking branch {branch_name}")
            self._git("fetch", remote, branch_name)
            self._git("checkout", "-b", branch_name, f"{remote}/{branch_name}")
        else:
            logger.info(f"Creating new branch {branch_name} from {self.config.default_base}")
            self._git("checkout", "-b", branch_name, self.base_ref)
        return WorkflowResult.success()

    @workflow_action
    def new_branch(self, branch_name: Optional[str]) -> WorkflowResult:
        branch_name = self._validated_branch_name(branch_name)
        logger.info(f"Creating new branch {branch_name} from {self.config.default_base}")
        self._git("checkout", "-b", branch_name, self.base_ref)
        return WorkflowResult.success()

    @workflow_action
    def commit_push(self, message: Optional[str]) -> WorkflowResult:
        """Stage everything, commit, and push with upstream tracking.

        An empty commit is not an error: the push still runs so that
        earlier local commits reach the remote.
        """
        if message is None or not message.strip():
            raise InvalidArgumentError("No commit message")
        branch = self._attached_branch()

        if not self._run_pre_commit_checks():
            _say("Pre-commit checks failed. Commit aborted.", "red")
            return WorkflowResult.failed("Pre-commit checks failed")

        self._git("add", "-A")
        if not self.runner.execute(Command.git("commit", "-m", message)).ok:
            _say("Nothing to commit")
        self._git("push", "--set-upstream", self.config.remote_name, branch)
        return WorkflowResult.success()

    @workflow_action
    def pull(self) -> WorkflowResult:
        branch = self._attached_branch()
        remote = self.config.remote_name
        stashed = self._stash_if_dirty()

        if self.config.sync_strategy == "rebase":
            command = Command.git("pull", "--rebase", remote, branch)
        else:
            command = Command.git("pull", remote, branch)

        status = self.runner.execute(command)
        if not status.ok:
            verb = self.queries.operation_in_progress()
            if verb:
                self._recover_from_conflict(verb, stashed)
                return WorkflowResult.conflict(f"Pull of {remote}/{branch} stopped", status.returncode)
            # Nothing was integrated, the worktree is as it was
            if stashed:
                self._restore_stash()
            return WorkflowResult.failed(f"Pull of {remote}/{branch} failed", status.returncode)

        if stashed:
            self._restore_stash()
        return WorkflowResult.success()

    @workflow_action
    def sync(self) -> WorkflowResult:
        """Bring the current branch up to date with the trunk.

        Rebases onto (or merges with --no-ff) remote/defaultBase. Conflicts
        are left for the user together with the commands to finish or
        abort; nothing is resolved automatically. The one exception is a
        stashed worktree with restoreStashOnFailure: the stopped operation
        is aborted so the stash can be put back.
        """
        branch = self._attached_branch()
        blocked = self._confirmation_gate(SYNC, branch)
        if blocked:
            return blocked

        stashed = self._stash_if_dirty()
        try:
            self._git("fetch", self.config.remote_name, self.config.default_base)
        except CommandFailedError:
            # Worktree untouched, safe to put the changes back
            if stashed:
                self._restore_stash()
            raise

        if self.config.sync_strategy == "rebase":
            verb = "rebase"
            command = Command.git("rebase", self.base_ref)
        else:
            verb = "merge"
            command = Command.git("merge", "--no-ff", self.base_ref)

        logger.info(f"Syncing {branch} with {self.base_ref} ({verb})")
        status = self.runner.execute(command)
        if not status.ok:
            self._recover_from_conflict(verb, stashed)
            return WorkflowResult.conflict(
                f"{verb.capitalize()} of {branch} onto {self.base_ref} stopped", status.returncode
            )

        if stashed:
            self._restore_stash()
        return WorkflowResult.success()

    @workflow_action
    def prune(self) -> WorkflowResult:
        branch = self.queries.current_branch()
        blocked = self._confirmation_gate(PRUNE, branch)
        if blocked:
            return blocked

        logger.info("Pruning remotes...")
        self._git("fetch", "--all", "--prune")
        self._git("remote", "prune", self.config.remote_name)
        return WorkflowResult.success()

    @workflow_action
    def status(self) -> WorkflowResult:
        self._git("status", "-sb")
        if not self.queries.has_upstream():
            _say(f"No upstream set for {self.queries.current_branch()}")
        return WorkflowResult.success()

    @workflow_action
    def ensure_upstream(self) -> WorkflowResult:
        """Push with --set-upstream unless the branch already tracks something."""
        branch = self._attached_branch()
        if self.queries.has_upstream():
            logger.debug(f"Upstream already set for {branch}")
            return WorkflowResult.success()

        logger.info(f"Setting upstream to {self.config.remote_name}/{branch}")
        self._git("push", "--set-upstream", self.config.remote_name, branch)
        return WorkflowResult.success()

    @workflow_action
    def init(self) -> WorkflowResult:
        if try_find_repo_root(self.repo_root) is not None:
            _say("Already a git repo; skipping init.")
            return WorkflowResult.success()
        self._git("init")
        _say("Repository initialized.")
        return WorkflowResult.success()

    def write_gitignore(self, preset: Optional[str] = None) -> WorkflowResult:
        preset = (preset or DEFAULT_GITIGNORE_PRESET).strip().lower()
        path = self.repo_root / ".gitignore"
        if path.exists():
            _say(".gitignore exists; skipping.")
            return WorkflowResult.success()

        content = GITIGNORE_PRESETS.get(preset, GITIGNORE_FALLBACK)
        if self.dry_run:
            _say(f"Would write .gitignore (preset: {preset})")
            return WorkflowResult.success()

        path.write_text(content, encoding="utf-8")
        _say(f"Wrote .gitignore (preset: {preset})")
        return WorkflowResult.success()

    @workflow_action
    def first_commit(self) -> WorkflowResult:
        if self.queries.has_commits():
            _say("Repo already has commits; skipping initial commit.")
            return WorkflowResult.success()

        self._git("add", "-A")
        if self.runner.execute(Command.git("commit", "-m", INITIAL_COMMIT_MESSAGE)).ok:
            _say("Created initial commit.")
        else:
            _say("Nothing to commit.")
        return WorkflowResult.success()

    @workflow_action
    def set_remote(self, url: Optional[str]) -> WorkflowResult:
        if url is None or not url.strip():
            raise InvalidArgumentError("Missing required option --url")
        url = url.strip()
        remote = self.config.remote_name

        if self.queries.remote_exists(remote):
            _say(f"Updating remote '{remote}' -> {url}")
            self._git("remote", "set-url", remote, url)
        else:
            _say(f"Adding remote '{remote}' -> {url}")
            self._git("remote", "add", remote, url)
        return WorkflowResult.success()

    @workflow_action
    def ensure_branch(self, branch_name: Optional[str]) -> WorkflowResult:
        """Make sure the current branch is called branch_name, renaming if needed."""
        branch_name = self._validated_branch_name(branch_name)
        current = self.queries.show_current_branch()

        if not current:
            self._git("checkout", "-b", branch_name)
        elif current != branch_name:
            _say(f"Renaming branch {current} -> {branch_name}")
            self._git("branch", "-M", branch_name)
        else:
            _say(f"Already on {branch_name}")
        return WorkflowResult.success()

    @workflow_action
    def clean_branches(self) -> WorkflowResult:
        """Delete local branches that have no branch of the same name on any remote.

        Protected branches and the checked-out branch are never offered.
        """
        remote_names = set(self.queries.remote_branch_names())
        current = self.queries.show_current_branch()
        stale = [
            name
            for name in self.queries.local_branches()
            if name not in remote_names
            and name != current
            and not BranchPolicy.is_protected(name, self.config)
        ]

        if not stale:
            _say("No stale branches to clean.")
            return WorkflowResult.success()

        _say("Stale local branches:")
        for index, name in enumerate(stale, start=1):
            _say(f"  [{index}] {name}")

        if not (self.assume_yes or self.confirm("Delete these branches?")):
            _say("No branches deleted.")
            return WorkflowResult.success()

        for name in stale:
            self._git("branch", "-D", name)
        if self.dry_run:
            _say(f"Would delete {len(stale)} stale branches.")
        else:
            _say("Deleted stale branches.", "green")
        return WorkflowResult.success()
