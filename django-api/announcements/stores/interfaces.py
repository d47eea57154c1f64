"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from announcements.domain import Announcement, AnnouncementDraft, AnnouncementId, AnnouncementKind


class AnnouncementStore(ABC):
    """Interface for banner and pop-up persistence.

    Write methods raise WriteError when the backend rejects the operation.
    """

    @abstractmethod
    def atomic(self) -> AbstractContextManager:
        """Return a context manager that commits or rolls back as one unit."""
        ...

    @abstractmethod
    def list_all(self, kind: AnnouncementKind) -> list[Announcement]:
        """Return all rows of a kind ordered by created_at descending."""
        ...

    @abstractmethod
    def get(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> Announcement | None:
        """Return a row by ID, or None if not found."""
        ...

    @abstractmethod
    def insert(self, kind: AnnouncementKind, draft: AnnouncementDraft, created_by: int) -> Announcement:
        """Insert an inactive row; activation goes through activate_exclusive."""
        ...

    @abstractmethod
    def update(self, kind: AnnouncementKind, announcement_id: AnnouncementId, draft: AnnouncementDraft) -> None:
        """Overwrite content fields. The active flag is left untouched."""
        ...

    @abstractmethod
    def delete(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        ...

    @abstractmethod
    def activate_exclusive(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        """Set active=true iff no other row of the kind is active, atomically.

        Raises:
            ActiveSlotTakenError: If another row holds the active slot.
        """
        ...

    @abstractmethod
    def deactivate(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        ...
