"""Singleton-active enforcement for presentation slots.

For banners and pop-ups "active" is a slot, not a flag: at most one row of
each kind may hold it. The check and the write happen in one store call so
that two racing activations cannot both succeed.
"""

import logging

from announcements.domain import AnnouncementId, AnnouncementKind
from announcements.stores.interfaces import AnnouncementStore

logger = logging.getLogger(__name__)


class SingletonActiveEnforcer:
    """Guards the single active slot of one announcement kind."""

    def __init__(self, store: AnnouncementStore, kind: AnnouncementKind) -> None:
        self._store = store
        self._kind = kind

    @property
    def kind(self) -> AnnouncementKind:
        return self._kind

    def activate(self, candidate_id: AnnouncementId) -> None:
        """Give the slot to candidate_id.

        Re-activating the current holder is a no-op.

        Raises:
            ActiveSlotTakenError: If another row is active. The caller must
                deactivate the incumbent first.
        """
        self._store.activate_exclusive(self._kind, candidate_id)
        logger.info("Activated %s %s", self._kind.value, candidate_id)

    def deactivate(self, announcement_id: AnnouncementId) -> None:
        """Release the slot. Always succeeds."""
        self._store.deactivate(self._kind, announcement_id)
        logger.info("Deactivated %s %s", self._kind.value, announcement_id)
