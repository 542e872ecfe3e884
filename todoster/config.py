"""
TODOSTER - Settings
===================
Resolved once at start-up and passed explicitly to the components that need
them. Nothing else in the package reads the environment.

Environment:
    TODOSTER_FILE       Path of the task file
    TODOSTER_LOG_LEVEL  Logging level name (default WARNING)
    XDG_CONFIG_HOME     Base directory for the default task file
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "TODOSTER"
APP_DIR_NAME = "todoster"
DEFAULT_FILE_NAME = "todos.json"
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _get(env: Mapping[str, str], name: str) -> Optional[str]:
    value = env.get(name)
    if value is None or value.strip() == "":
        return None
    return value


def default_file_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """~/.config/todoster/todos.json, honouring XDG_CONFIG_HOME"""
    if env is None:
        env = os.environ

    xdg = _get(env, "XDG_CONFIG_HOME")
    home = _get(env, "HOME")
    if xdg:
        base = Path(xdg)
    elif home:
        base = Path(home) / ".config"
    else:
        base = Path(".")

    return base / APP_DIR_NAME / DEFAULT_FILE_NAME


@dataclass(frozen=True)
class Settings:
    file_path: Path
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "Settings":
        if env is None:
            env = os.environ

        raw_file = _get(env, _k("FILE"))
        file_path = Path(raw_file).expanduser() if raw_file else default_file_path(env)
        log_level = (_get(env, _k("LOG_LEVEL")) or DEFAULT_LOG_LEVEL).strip().upper()

        return Settings(file_path=file_path, log_level=log_level)

    def with_file(self, file_path: Optional[Path]) -> "Settings":
        """Copy with the task file replaced (used for --file)"""
        if file_path is None:
            return self
        return Settings(file_path=Path(file_path).expanduser(), log_level=self.log_level)
