"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import PreconditionError

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = PROJECT_ROOT / "03_data"
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_DB_PATH = DATA_DIR / "stream_archive.db"
DEFAULT_ARCHIVE_DIR = DATA_DIR / "archives"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DATA_DIR.mkdir(parents=True, exist_ok=True)
LOGS_DIR.mkdir(parents=True, exist_ok=True)


PathLike = Union[str, Path]

DEFAULT_MAX_MESSAGES = 10000
DEFAULT_EXPORT_INTERVAL_MS = 5 * 60 * 1000


def resolve_db_path(env_value: PathLike | None = None) -> PathLike:
    """Resolve DATABASE_URL to an absolute path."""
    if not env_value:
        return DEFAULT_DB_PATH

    if str(env_value) == ":memory:":
        return ":memory:"

    candidate = Path(env_value)
    return candidate if candidate.is_absolute() else PROJECT_ROOT / candidate


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise PreconditionError(f"{name} must be an integer, got {value!r}")


@dataclass
class ArchiverOptions:
    """Recognized archiver options."""

    enabled: bool = False
    max_messages: int = DEFAULT_MAX_MESSAGES
    auto_export: bool = False
    include_decoded: bool = False
    export_interval: int = DEFAULT_EXPORT_INTERVAL_MS  # milliseconds

    def __post_init__(self) -> None:
        if self.max_messages < 1:
            raise PreconditionError(
                f"max_messages must be at least 1, got {self.max_messages}"
            )
        if self.export_interval <= 0:
            raise PreconditionError(
                f"export_interval must be positive, got {self.export_interval}"
            )

    @classmethod
    def from_env(cls) -> "ArchiverOptions":
        """Build options from ARCHIVE_* environment variables."""
        return cls(
            enabled=_env_flag("ARCHIVE_ENABLED", False),
            max_messages=_env_int("ARCHIVE_MAX_MESSAGES", DEFAULT_MAX_MESSAGES),
            auto_export=_env_flag("ARCHIVE_AUTO_EXPORT", False),
            include_decoded=_env_flag("ARCHIVE_INCLUDE_DECODED", False),
            export_interval=_env_int(
                "ARCHIVE_EXPORT_INTERVAL_MS", DEFAULT_EXPORT_INTERVAL_MS
            ),
        )
