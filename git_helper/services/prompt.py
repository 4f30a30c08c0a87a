"""Interactive confirmation for guarded actions."""

from typing import Callable

from rich.console import Console
from rich.prompt import Confirm

console = Console()

# Called with a question, returns the user's answer
Confirmer = Callable[[str], bool]


def console_confirm(message: str) -> bool:
    """Ask a yes/no question on the terminal. Anything but yes declines."""
    try:
        return Confirm.ask(message, default=False, console=console)
    except EOFError:
        # stdin closed, nobody to answer
        return False
