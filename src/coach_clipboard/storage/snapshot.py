"""Snapshot storage: load and save the whole entity store as one JSON file."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from coach_clipboard.errors import StoreError
from coach_clipboard.ids import IdGenerator
from coach_clipboard.storage.base import BaseStorage
from coach_clipboard.storage.entity_store import EntityStore

logger = logging.getLogger(__name__)


class SnapshotStorage(BaseStorage):
    """Storage for full entity store snapshots."""

    FILE_NAME = "store.json"

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        """Initialize snapshot storage in the clipboard_data directory."""
        super().__init__("clipboard_data", data_dir)

    @property
    def path(self) -> Path:
        """Path to the snapshot file."""
        return self.data_dir / self.FILE_NAME

    def exists(self) -> bool:
        return self.path.exists()

    def load(self, id_generator: Optional[IdGenerator] = None) -> EntityStore | None:
        """
        Load the stored snapshot.

        Args:
            id_generator: Id generator for the restored store

        Returns:
            The restored store, or None if there is no usable snapshot
        """
        data = self._load_json(self.path)
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("snapshot %s is not a JSON object, ignoring it", self.path)
            return None
        try:
            store = EntityStore.from_snapshot(data, id_generator)
        except (StoreError, ValidationError) as e:
            logger.warning("snapshot %s is invalid, ignoring it: %s", self.path, e)
            return None
        logger.info("loaded snapshot %s (revision %d)", self.path, store.revision)
        return store

    def save(self, store: EntityStore) -> None:
        """Write the store's full snapshot."""
        self._save_json(self.path, store.to_snapshot())
        logger.debug("saved snapshot %s", self.path)
