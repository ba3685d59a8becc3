"""Settings loaded from environment variables.

Variables:
- TASKLIST_LOG_LEVEL: console log level (default WARNING)
- TASKLIST_LOG_FILE: optional path of a debug log file
- TASKLIST_DEFAULT_FILE: file used when a save/load prompt is left empty
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKLIST"

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_TASK_FILE = "tasks.json"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True)
class Settings:
    log_level: str
    log_file: Optional[Path]
    default_file: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL).upper(),
            log_file=_env_path(_k("LOG_FILE")),
            default_file=_env(_k("DEFAULT_FILE"), DEFAULT_TASK_FILE),
        )
