"""Base storage class with data directory configuration."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from coach_clipboard.config import Settings

logger = logging.getLogger(__name__)


def get_data_dir() -> Path:
    """
    Get the data directory for storing local files.

    Uses COACH_CLIPBOARD_DATA_DIR environment variable if set, otherwise
    defaults to ``data/`` in the project root.

    Returns:
        Path to the data directory
    """
    return Settings.from_env().data_dir


class BaseStorage:
    """Base class for storage implementations."""

    def __init__(self, subdirectory: str, data_dir: Optional[Path] = None):
        """
        Initialize storage with a subdirectory name.

        Args:
            subdirectory: Name of the subdirectory within the data directory
            data_dir: Data directory override (defaults to get_data_dir())
        """
        self.data_dir = (data_dir or get_data_dir()) / subdirectory
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _load_json(self, file_path: Path) -> dict[str, Any] | list[Any] | None:
        """Load JSON from a file, returning None if it doesn't exist or is unreadable."""
        if not file_path.exists():
            return None
        try:
            with open(file_path, "r") as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("could not read %s: %s", file_path, e)
            return None

    def _save_json(self, file_path: Path, data: dict[str, Any] | list[Any]) -> None:
        """Save data as JSON, replacing the file only once the write completed."""
        tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        tmp_path.replace(file_path)
