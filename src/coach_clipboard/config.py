"""Environment-driven settings."""

import os
from dataclasses import dataclass
from pathlib import Path

_TRUE_VALUES = {"1", "true", "yes", "on"}


def default_data_dir() -> Path:
    """Default data directory: ``data/`` in the project root (parent of src/)."""
    return Path(__file__).parent.parent.parent / "data"


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the server and CLI."""

    data_dir: Path
    persist: bool = True
    log_level: str = "INFO"
    id_mode: str = "uuid"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Read settings from environment variables.

        - COACH_CLIPBOARD_DATA_DIR: where the store snapshot lives
        - COACH_CLIPBOARD_PERSIST: save the snapshot after each change (default on)
        - COACH_CLIPBOARD_LOG_LEVEL: logging level (default INFO)
        - COACH_CLIPBOARD_ID_MODE: ``uuid`` or ``sequential`` ids

        Returns:
            Settings instance
        """
        env_dir = os.environ.get("COACH_CLIPBOARD_DATA_DIR")
        data_dir = Path(env_dir) if env_dir else default_data_dir()
        persist = os.environ.get("COACH_CLIPBOARD_PERSIST", "1").strip().lower() in _TRUE_VALUES
        log_level = os.environ.get("COACH_CLIPBOARD_LOG_LEVEL", "INFO").upper()
        id_mode = os.environ.get("COACH_CLIPBOARD_ID_MODE", "uuid").strip().lower()
        return cls(data_dir=data_dir, persist=persist, log_level=log_level, id_mode=id_mode)
