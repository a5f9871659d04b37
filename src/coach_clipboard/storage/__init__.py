"""Storage modules for Coach Clipboard."""

from coach_clipboard.storage.base import BaseStorage, get_data_dir
from coach_clipboard.storage.entity_store import EntityStore
from coach_clipboard.storage.snapshot import SnapshotStorage

__all__ = [
    "BaseStorage",
    "get_data_dir",
    "EntityStore",
    "SnapshotStorage",
]
