"""Shared constants for git-helper."""

from typing import Dict, Tuple

APP_NAME = "GITHELPER"
CONFIG_FILE_NAME = ".githelper.json"

# Exit codes
EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 2
EXIT_CONFIG_ERROR = 3
EXIT_GIT_NOT_FOUND = 4
EXIT_BLOCKED = 5
EXIT_FAILED = 6


# Actions that make sense outside of a repository
REPO_OPTIONAL_ACTIONS = frozenset({"help", "init", "gitignore"})

ACTIONS: Tuple[str, ...] = (
    "help",
    "menu",
    "fetch",
    "list",
    "checkout",
    "newbranch",
    "commitpush",
    "pull",
    "sync",
    "prune",
    "status",
    "upstream",
    "init",
    "gitignore",
    "firstcommit",
    "remote",
    "branch",
    "cleanbranches",
)

MENU_ACTIONS: Tuple[str, ...] = tuple(a for a in ACTIONS if a != "menu") + ("exit",)

ACTION_HELP: Dict[str, str] = {
    "help": "Show this help",
    "menu": "Interactive menu",
    "fetch": "git fetch --all --prune",
    "list": "List local & remote branches",
    "checkout": "Checkout or create branch (-b <name>)",
    "newbranch": "Create new branch from base (-b <name>)",
    "commitpush": 'Stage all, commit, push (-m "<msg>", runs pre-commit checks)',
    "pull": "Pull with strategy (auto-stash)",
    "sync": "Update current branch on top of base (auto-stash)",
    "prune": "Prune remotes",
    "status": "git status short",
    "upstream": "Set upstream if missing",
    "init": "git init if not a repo",
    "gitignore": "Write .gitignore if missing (-p python|ruby|node|minimal)",
    "firstcommit": "Stage all and create initial commit",
    "remote": "Add or update the remote (--url <git-url>)",
    "branch": "Ensure you are on <name> (create/rename as needed)",
    "cleanbranches": "Interactive cleanup of local branches without a remote",
}

HELP_EXAMPLES = """
Examples:
  githelper list
  githelper checkout -b feature/foo
  githelper newbranch -b bugfix/bar
  githelper commitpush -m "fix: update"
  githelper sync
  githelper prune --yes
"""


# Conflict remediation per sync strategy verb
REMEDIATION_TEMPLATE = """Conflicts detected. Resolve, then:
  git add -A
  git {verb} --continue
To abort:
  git {verb} --abort"""


DEFAULT_GITIGNORE_PRESET = "python"

GITIGNORE_PRESETS: Dict[str, str] = {
    "python": "__pycache__/\n*.py[cod]\n.env/\n.venv/\n.DS_Store\n",
    "ruby": (
        "# Ruby / Bundler\n"
        "*.gem\n"
        "*.rbc\n"
        "/.bundle/\n"
        "/vendor/bundle/\n"
        ".bundle/\n"
        ".byebug_history\n"
        "coverage/\n"
        "pkg/\n"
        "tmp/\n"
        "# macOS\n"
        ".DS_Store\n"
    ),
    "node": "node_modules/\ndist/\n.DS_Store\n",
    "minimal": ".DS_Store\ntmp/\n",
}

GITIGNORE_FALLBACK = "# .gitignore\n"

INITIAL_COMMIT_MESSAGE = "Initial commit"
