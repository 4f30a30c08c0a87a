"""Logging configuration for git-helper"""
import logging
import sys
from pathlib import Path

from git_helper.constants import APP_NAME

LOG_LEVELS = {
    "silent": logging.CRITICAL,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to log levels in terminal output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m'       # Reset
    }

    def format(self, record):
        """Format log record with colors if in a terminal."""
        levelname = record.levelname
        if sys.stderr.isatty() and levelname in self.COLORS:
            record.levelname = f"{self.COLORS[levelname]}{levelname.lower()}{self.COLORS['RESET']}"
        else:
            record.levelname = levelname.lower()
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logging(log_level: str = "info", verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Safe to call more than once: existing handlers are replaced, so the CLI
    calls it with defaults first and again once the config file is read.

    Args:
        log_level: One of "silent", "info" or "debug" (the config's logLevel)
        verbose: If True, show DEBUG level messages regardless of log_level
    """
    debug = verbose or log_level == "debug"
    level = logging.DEBUG if debug else LOG_LEVELS.get(log_level, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        log_dir = Path.home() / '.githelper'
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / 'githelper.log', mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        formatter = ColoredFormatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        formatter = ColoredFormatter(fmt=f'[{APP_NAME}] %(levelname)s %(message)s')
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_helper.'):
        name = name.replace('git_helper.', '', 1)
    if name.startswith('services.'):
        name = name.replace('services.', '', 1)

    return logging.getLogger(name)
