"""Django ORM implementation of the AnnouncementStore."""

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from common.errors import ActiveSlotTakenError, WriteError
from announcements import models as orm
from announcements.domain import (
    Announcement,
    AnnouncementDraft,
    AnnouncementId,
    AnnouncementKind,
    CallToAction,
    PopupFrequency,
)
from announcements.stores.interfaces import AnnouncementStore

MODELS = {
    AnnouncementKind.BANNER: orm.Banner,
    AnnouncementKind.POPUP: orm.Popup,
}

TITLE_FIELDS = {
    AnnouncementKind.BANNER: "headline",
    AnnouncementKind.POPUP: "title",
}


def _to_announcement(kind: AnnouncementKind, row) -> Announcement:
    frequency = getattr(row, "frequency", None)
    return Announcement(
        id=AnnouncementId(row.id),
        kind=kind,
        title=getattr(row, TITLE_FIELDS[kind]),
        message=row.message,
        cta=CallToAction(label=row.cta_label, url=row.cta_url),
        audience=row.audience,
        frequency=PopupFrequency(frequency) if frequency else None,
        active=row.active,
        created_by=row.created_by_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _columns(kind: AnnouncementKind, draft: AnnouncementDraft) -> dict:
    columns = {
        TITLE_FIELDS[kind]: draft.title.strip(),
        "message": draft.message.strip(),
        "cta_label": draft.cta.label,
        "cta_url": draft.cta.url,
        "audience": draft.audience,
    }
    if kind == AnnouncementKind.POPUP and draft.frequency is not None:
        columns["frequency"] = draft.frequency.value
    return columns


class DjangoAnnouncementStore(AnnouncementStore):
    """Banner and pop-up store using Django ORM."""

    def atomic(self):
        return transaction.atomic()

    def list_all(self, kind: AnnouncementKind) -> list[Announcement]:
        return [_to_announcement(kind, row) for row in MODELS[kind].objects.all()]

    def get(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> Announcement | None:
        row = MODELS[kind].objects.filter(id=announcement_id.value).first()
        return _to_announcement(kind, row) if row else None

    def insert(self, kind: AnnouncementKind, draft: AnnouncementDraft, created_by: int) -> Announcement:
        try:
            row = MODELS[kind].objects.create(active=False, created_by_id=created_by, **_columns(kind, draft))
        except DatabaseError as exc:
            raise WriteError(f"Could not create {kind.value}: {exc}") from exc
        return _to_announcement(kind, row)

    def update(self, kind: AnnouncementKind, announcement_id: AnnouncementId, draft: AnnouncementDraft) -> None:
        try:
            MODELS[kind].objects.filter(id=announcement_id.value).update(
                updated_at=timezone.now(), **_columns(kind, draft)
            )
        except DatabaseError as exc:
            raise WriteError(f"Could not update {kind.value}: {exc}") from exc

    def delete(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        try:
            MODELS[kind].objects.filter(id=announcement_id.value).delete()
        except DatabaseError as exc:
            raise WriteError(f"Could not delete {kind.value}: {exc}") from exc

    def activate_exclusive(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        model = MODELS[kind]
        try:
            with transaction.atomic():
                incumbent = (
                    model.objects.select_for_update()
                    .filter(active=True)
                    .exclude(id=announcement_id.value)
                    .values_list("id", flat=True)
                    .first()
                )
                if incumbent is not None:
                    raise ActiveSlotTakenError(kind.value, AnnouncementId(incumbent))
                model.objects.filter(id=announcement_id.value).update(
                    active=True, updated_at=timezone.now()
                )
        except IntegrityError as exc:
            # A concurrent activation committed first.
            raise ActiveSlotTakenError(kind.value) from exc
        except DatabaseError as exc:
            raise WriteError(f"Could not activate {kind.value}: {exc}") from exc

    def deactivate(self, kind: AnnouncementKind, announcement_id: AnnouncementId) -> None:
        try:
            MODELS[kind].objects.filter(id=announcement_id.value).update(
                active=False, updated_at=timezone.now()
            )
        except DatabaseError as exc:
            raise WriteError(f"Could not deactivate {kind.value}: {exc}") from exc
