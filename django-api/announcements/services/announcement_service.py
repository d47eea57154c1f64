"""Announcement service - banners and pop-ups.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from common.errors import NotAuthenticatedError, NotFoundError, ValidationError
from common.ids import parse_id
from announcements.domain import (
    AUDIENCES_BY_KIND,
    Announcement,
    AnnouncementDraft,
    AnnouncementId,
    AnnouncementKind,
)
from announcements.services.singleton import SingletonActiveEnforcer
from announcements.stores.interfaces import AnnouncementStore


def validate_draft(kind: AnnouncementKind, draft: AnnouncementDraft) -> None:
    """Reject an announcement form before any write.

    CTA pairing and URL format are checked when the CallToAction is built.
    """
    label = "Headline" if kind == AnnouncementKind.BANNER else "Title"
    if not draft.title.strip():
        raise ValidationError(f"{label} is required", field_name="title")
    if not draft.message.strip():
        raise ValidationError("Message is required", field_name="message")
    allowed = [a.value for a in AUDIENCES_BY_KIND[kind]]
    if draft.audience not in allowed:
        raise ValidationError(
            f"Audience must be one of {', '.join(allowed)}", field_name="audience"
        )
    if kind == AnnouncementKind.BANNER and draft.frequency is not None:
        raise ValidationError("Banners have no display frequency", field_name="frequency")


class AnnouncementService:
    """CRUD plus slot activation for one announcement kind."""

    def __init__(self, store: AnnouncementStore, kind: AnnouncementKind) -> None:
        self._store = store
        self._kind = kind
        self._enforcer = SingletonActiveEnforcer(store, kind)

    def _get(self, announcement_id: AnnouncementId) -> Announcement:
        row = self._store.get(self._kind, announcement_id)
        if row is None:
            raise NotFoundError(self._kind.value, announcement_id)
        return row

    def _parse_id(self, raw: str) -> AnnouncementId:
        return parse_id(AnnouncementId, raw, self._kind.value)

    def list_all(self) -> list[Announcement]:
        return self._store.list_all(self._kind)

    def get(self, announcement_id: str) -> Announcement:
        return self._get(self._parse_id(announcement_id))

    def create(self, draft: AnnouncementDraft, created_by: int | None) -> Announcement:
        """Create a row; active=true follows the same rule as activate.

        Raises:
            NotAuthenticatedError: If no user is signed in.
            ValidationError: If the form is invalid.
            ActiveSlotTakenError: If active=true while another row is active.
                Nothing is written in that case.
        """
        if created_by is None:
            raise NotAuthenticatedError()
        validate_draft(self._kind, draft)
        with self._store.atomic():
            row = self._store.insert(self._kind, draft, created_by)
            if draft.active:
                self._enforcer.activate(row.id)
        return self._get(row.id)

    def update(self, announcement_id: str, draft: AnnouncementDraft) -> Announcement:
        """Overwrite content and apply the requested active flag.

        Raises:
            ActiveSlotTakenError: If turning this row on while another is active.
        """
        aid = self._parse_id(announcement_id)
        current = self._get(aid)
        validate_draft(self._kind, draft)
        with self._store.atomic():
            self._store.update(self._kind, aid, draft)
            if draft.active and not current.active:
                self._enforcer.activate(aid)
            elif not draft.active and current.active:
                self._enforcer.deactivate(aid)
        return self._get(aid)

    def activate(self, announcement_id: str) -> Announcement:
        aid = self._parse_id(announcement_id)
        self._get(aid)
        self._enforcer.activate(aid)
        return self._get(aid)

    def deactivate(self, announcement_id: str) -> Announcement:
        aid = self._parse_id(announcement_id)
        self._get(aid)
        self._enforcer.deactivate(aid)
        return self._get(aid)

    def delete(self, announcement_id: str) -> None:
        aid = self._parse_id(announcement_id)
        self._get(aid)
        self._store.delete(self._kind, aid)
