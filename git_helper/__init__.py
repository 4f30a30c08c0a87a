"""
git-helper - Guard-railed git workflows from the command line
"""

import os

# A missing git binary is reported by the pre-flight check, not at import time.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from .__version__ import __version__  # noqa: E402
from .config import Config, load_config  # noqa: E402
from .core import WorkflowEngine  # noqa: E402
from .cli import main  # noqa: E402

__all__ = ["Config", "WorkflowEngine", "load_config", "main", "__version__"]
