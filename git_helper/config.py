"""Configuration handling for git-helper"""

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

from git_helper.exceptions import ConfigError
from git_helper.logging_config import get_logger

logger = get_logger(__name__)

SYNC_STRATEGIES = ("rebase", "merge")
LOG_LEVEL_NAMES = ("silent", "info", "debug")

_TRUE_STRINGS = {"true", "yes", "on", "1", "y"}
_FALSE_STRINGS = {"false", "no", "off", "0", "n", ""}


@dataclass(frozen=True)
class Config:
    """Effective configuration for one run. Built once, never mutated."""

    default_base: str = "dev"
    sync_strategy: str = "rebase"  # rebase, merge
    remote_name: str = "origin"

    # Branch naming
    enforce_prefix: bool = True
    allowed_prefixes: Tuple[str, ...] = ("feature/", "bugfix/", "hotfix/")

    # Protected branches and confirmation gates
    protect: Tuple[str, ...] = ("main", "dev")
    confirm_on_prune: bool = True
    confirm_on_sync: bool = False

    log_level: str = "info"  # silent, info, debug

    # Stash handling around sync/pull
    auto_stash: bool = True
    restore_stash_on_failure: bool = True

    # Script run before commitpush stages anything (None disables)
    pre_commit_hook: Optional[str] = "scripts/smoke.sh"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_default_base()
        self._validate_sync_strategy()
        self._validate_log_level()

    def _validate_default_base(self):
        """Validate default_base and remote_name are not empty."""
        if not self.default_base or not self.default_base.strip():
            raise ConfigError("defaultBase cannot be empty")
        if not self.remote_name or not self.remote_name.strip():
            raise ConfigError("remoteName cannot be empty")

    def _validate_sync_strategy(self):
        """Validate sync_strategy is one of allowed values."""
        if self.sync_strategy not in SYNC_STRATEGIES:
            raise ConfigError(
                f"syncStrategy must be one of {list(SYNC_STRATEGIES)}, got '{self.sync_strategy}'"
            )

    def _validate_log_level(self):
        """Validate log_level is one of allowed values."""
        if self.log_level not in LOG_LEVEL_NAMES:
            raise ConfigError(
                f"logLevel must be one of {list(LOG_LEVEL_NAMES)}, got '{self.log_level}'"
            )

    def to_dict(self) -> dict:
        """Convert config to its config-file representation (camelCase keys)."""
        return {key: getattr(self, attr) for key, attr in CONFIG_KEYS.items()}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from a config-file mapping.

        Recognized keys are coerced and overlaid onto the defaults one at a
        time; a value that cannot be coerced is reported and skipped so the
        default for that field survives. Unknown keys are ignored.
        """
        config = cls()
        for key, value in config_dict.items():
            attr = CONFIG_KEYS.get(key)
            if attr is None:
                logger.debug(f"Ignoring unknown config key '{key}'")
                continue
            try:
                config = replace(config, **{attr: _COERCERS[attr](value)})
            except ConfigError as e:
                logger.warning(f"Config value for '{key}' ignored: {e}")
        return config


# Config file key -> dataclass attribute
CONFIG_KEYS: Dict[str, str] = {
    "defaultBase": "default_base",
    "syncStrategy": "sync_strategy",
    "remoteName": "remote_name",
    "enforcePrefix": "enforce_prefix",
    "allowedPrefixes": "allowed_prefixes",
    "protect": "protect",
    "confirmOnPrune": "confirm_on_prune",
    "confirmOnSync": "confirm_on_sync",
    "logLevel": "log_level",
    "autoStash": "auto_stash",
    "restoreStashOnFailure": "restore_stash_on_failure",
    "preCommitHook": "pre_commit_hook",
}


def coerce_bool(value: Any) -> bool:
    """Coerce JSON booleans, 0/1 and boolean-looking strings to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ConfigError(f"expected a boolean, got {value!r}")


def coerce_str(value: Any) -> str:
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        text = str(value).strip()
        if text:
            return text
    raise ConfigError(f"expected a non-empty string, got {value!r}")


def coerce_str_tuple(value: Any) -> Tuple[str, ...]:
    """Coerce a JSON array of strings or a comma-separated string to a tuple."""
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = value
    else:
        raise ConfigError(f"expected a list of strings, got {value!r}")

    result = []
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"expected a list of strings, got item {item!r}")
        item = item.strip()
        if item and item not in result:
            result.append(item)
    return tuple(result)


def _coerce_choice(choices: Tuple[str, ...]) -> Callable[[Any], str]:
    def coerce(value: Any) -> str:
        text = coerce_str(value).lower()
        if text not in choices:
            raise ConfigError(f"expected one of {list(choices)}, got {value!r}")
        return text

    return coerce


def coerce_optional_path(value: Any) -> Optional[str]:
    """A hook path, or None when given null, false or an empty string."""
    if value is None or value is False:
        return None
    if isinstance(value, str):
        return value.strip() or None
    raise ConfigError(f"expected a path or null, got {value!r}")


_COERCERS: Dict[str, Callable[[Any], Any]] = {
    "default_base": coerce_str,
    "sync_strategy": _coerce_choice(SYNC_STRATEGIES),
    "remote_name": coerce_str,
    "enforce_prefix": coerce_bool,
    "allowed_prefixes": coerce_str_tuple,
    "protect": coerce_str_tuple,
    "confirm_on_prune": coerce_bool,
    "confirm_on_sync": coerce_bool,
    "log_level": _coerce_choice(LOG_LEVEL_NAMES),
    "auto_stash": coerce_bool,
    "restore_stash_on_failure": coerce_bool,
    "pre_commit_hook": coerce_optional_path,
}


def load_config(path: Union[str, Path]) -> Config:
    """Resolve the effective configuration from an optional JSON file.

    A missing file means defaults. A file that is not a JSON object is
    reported as a warning and also means defaults; it is never fatal.

    Args:
        path: Location of the config file (normally .githelper.json at the repo root)

    Returns:
        Config: Defaults overlaid with the file's recognized keys
    """
    config_path = Path(path)
    if not config_path.is_file():
        logger.debug(f"No config file at {config_path}, using defaults")
        return Config()

    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Config parse error in {config_path}, using defaults: {e}")
        return Config()

    if not isinstance(raw, dict):
        logger.warning(f"Config file {config_path} is not a JSON object, using defaults")
        return Config()

    config = Config.from_dict(raw)
    logger.debug(f"Loaded config from {config_path}")
    return config
