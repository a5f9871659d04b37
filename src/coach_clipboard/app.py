"""Application wiring: one store, one session manager, optional snapshot storage."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from coach_clipboard.config import Settings
from coach_clipboard.ids import make_id_generator
from coach_clipboard.services.session_manager import SessionManager
from coach_clipboard.storage.entity_store import EntityStore
from coach_clipboard.storage.snapshot import SnapshotStorage

logger = logging.getLogger(__name__)


@dataclass
class ClipboardApp:
    """Shared state handed to every tool."""

    store: EntityStore
    snapshots: Optional[SnapshotStorage] = None
    sessions: SessionManager = field(init=False)
    _saved_revision: int = field(default=-1, init=False, repr=False)

    def __post_init__(self) -> None:
        self.sessions = SessionManager(self.store)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClipboardApp":
        """
        Build the app, restoring the saved snapshot when persistence is on.

        Args:
            settings: Runtime settings

        Returns:
            A ready ClipboardApp
        """
        id_generator = make_id_generator(settings.id_mode)
        if not settings.persist:
            return cls(store=EntityStore(id_generator))

        snapshots = SnapshotStorage(settings.data_dir)
        store = snapshots.load(id_generator)
        if store is None:
            logger.info("no snapshot in %s, starting empty", snapshots.data_dir)
            store = EntityStore(id_generator)
        return cls(store=store, snapshots=snapshots)

    def persist(self) -> None:
        """Save the store if it changed since the last save."""
        if self.snapshots is None:
            return
        if self.store.revision == self._saved_revision:
            return
        self.snapshots.save(self.store)
        self._saved_revision = self.store.revision
