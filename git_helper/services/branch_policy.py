"""Branch policy decisions for git-helper."""

from git_helper.config import Config

SYNC = "sync"
PRUNE = "prune"


class BranchPolicy:
    """Pure decision logic about branch names. No I/O."""

    @staticmethod
    def is_protected(branch_name: str, config: Config) -> bool:
        """
        Check if a branch is protected.

        Exact, case-sensitive membership; no patterns.

        Args:
            branch_name: Name of the branch
            config: Effective configuration

        Returns:
            True if branch is protected
        """
        return branch_name in config.protect

    @staticmethod
    def has_allowed_prefix(branch_name: str, config: Config) -> bool:
        """
        Check if a branch name satisfies the prefix rule.

        Args:
            branch_name: Proposed branch name
            config: Effective configuration

        Returns:
            True if prefixes are not enforced, or the name starts with any allowed prefix
        """
        if not config.enforce_prefix:
            return True
        return any(branch_name.startswith(prefix) for prefix in config.allowed_prefixes)

    @staticmethod
    def requires_confirmation(action: str, branch_name: str, config: Config) -> bool:
        """
        Check if running action on branch_name needs an explicit confirmation.

        Args:
            action: Workflow action name ("sync" or "prune"; others never need one)
            branch_name: Branch the action runs on
            config: Effective configuration

        Returns:
            True if the branch is protected and the action's confirm flag is set
        """
        if action == SYNC:
            flag = config.confirm_on_sync
        elif action == PRUNE:
            flag = config.confirm_on_prune
        else:
            flag = False
        return flag and BranchPolicy.is_protected(branch_name, config)

    @staticmethod
    def prefix_hint(config: Config) -> str:
        return f"Branch name must start with one of: {' '.join(config.allowed_prefixes)}"
