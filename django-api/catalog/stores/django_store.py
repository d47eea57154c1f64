"""Django ORM implementation of the CatalogStore."""

import functools
from typing import Iterable

from django.db import DatabaseError, transaction
from django.db.models import Max, Sum
from django.utils import timezone

from common.errors import WriteError
from catalog import models as orm
from catalog.domain import (
    Pack,
    PackId,
    PackStatus,
    Sample,
    SampleId,
    SampleStatus,
    SampleType,
    Stem,
    StemId,
    Term,
    TermId,
    TermKind,
)
from catalog.domain.submissions import PackFields, SampleDraft, SampleEdit
from catalog.stores.interfaces import CatalogStore

TERM_MODELS = {
    TermKind.CATEGORY: orm.Category,
    TermKind.GENRE: orm.Genre,
    TermKind.MOOD: orm.Mood,
    TermKind.CREATOR: orm.Creator,
}


def _writes(method):
    """Map backend rejections to WriteError."""

    @functools.wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            raise WriteError(f"{method.__name__.replace('_', ' ')} failed: {exc}") from exc

    return wrapper


def _to_stem(row: orm.Stem) -> Stem:
    return Stem(
        id=StemId(row.id),
        sample_id=SampleId(row.sample_id),
        name=row.name,
        audio_url=row.audio_url,
        file_size_bytes=row.file_size_bytes,
        created_at=row.created_at,
    )


def _to_sample(row: orm.Sample) -> Sample:
    return Sample(
        id=SampleId(row.id),
        pack_id=PackId(row.pack_id),
        name=row.name,
        audio_url=row.audio_url,
        sample_type=SampleType(row.sample_type),
        status=SampleStatus(row.status),
        has_stems=row.has_stems,
        bpm=row.bpm,
        key=row.key,
        length=row.length,
        credit_cost=row.credit_cost,
        file_size_bytes=row.file_size_bytes,
        download_count=row.download_count,
        genre_id=TermId(row.genre_id) if row.genre_id else None,
        created_at=row.created_at,
        updated_at=row.updated_at,
        stems=tuple(_to_stem(s) for s in row.stems.all()),
    )


def _to_pack(row: orm.Pack) -> Pack:
    return Pack(
        id=PackId(row.id),
        name=row.name,
        description=row.description,
        creator_id=TermId(row.creator_id),
        category_id=TermId(row.category_id),
        cover_url=row.cover_url,
        tags=tuple(row.tags or ()),
        is_premium=row.is_premium,
        status=PackStatus(row.status),
        download_count=row.download_count,
        created_at=row.created_at,
        updated_at=row.updated_at,
        genre_ids=tuple(TermId(pg.genre_id) for pg in row.pack_genres.all()),
    )


def _to_term(kind: TermKind, row) -> Term:
    return Term(
        id=TermId(row.id),
        kind=kind,
        name=row.name,
        description=getattr(row, "description", ""),
        is_active=row.is_active,
    )


class DjangoCatalogStore(CatalogStore):
    """PostgreSQL/SQLite-backed catalog store using Django ORM."""

    def atomic(self):
        return transaction.atomic()

    def get_pack(self, pack_id: PackId) -> Pack | None:
        row = orm.Pack.objects.prefetch_related("pack_genres").filter(id=pack_id.value).first()
        return _to_pack(row) if row else None

    @_writes
    def insert_pack(self, fields: PackFields, status: PackStatus, cover_url: str | None) -> Pack:
        row = orm.Pack.objects.create(
            name=fields.name.strip(),
            description=fields.description,
            creator_id=fields.creator_id.value,
            category_id=fields.category_id.value,
            cover_url=cover_url,
            tags=fields.tags.as_list(),
            is_premium=fields.is_premium,
            status=status.value,
        )
        return _to_pack(row)

    @_writes
    def update_pack(self, pack_id: PackId, fields: PackFields, cover_url: str | None) -> None:
        changes = {
            "name": fields.name.strip(),
            "description": fields.description,
            "creator_id": fields.creator_id.value,
            "category_id": fields.category_id.value,
            "tags": fields.tags.as_list(),
            "is_premium": fields.is_premium,
            "updated_at": timezone.now(),
        }
        if cover_url is not None:
            changes["cover_url"] = cover_url
        orm.Pack.objects.filter(id=pack_id.value).update(**changes)

    @_writes
    def set_pack_status(self, pack_id: PackId, status: PackStatus) -> None:
        orm.Pack.objects.filter(id=pack_id.value).update(
            status=status.value, updated_at=timezone.now()
        )

    @_writes
    def delete_pack(self, pack_id: PackId) -> None:
        with transaction.atomic():
            orm.Pack.objects.filter(id=pack_id.value).delete()

    @_writes
    def insert_pack_genres(self, pack_id: PackId, genre_ids: Iterable[TermId]) -> None:
        orm.PackGenre.objects.bulk_create(
            [orm.PackGenre(pack_id=pack_id.value, genre_id=g.value) for g in genre_ids]
        )

    @_writes
    def delete_pack_genres(self, pack_id: PackId) -> None:
        orm.PackGenre.objects.filter(pack_id=pack_id.value).delete()

    def get_sample(self, sample_id: SampleId) -> Sample | None:
        row = orm.Sample.objects.prefetch_related("stems").filter(id=sample_id.value).first()
        return _to_sample(row) if row else None

    def list_samples(self, pack_id: PackId, include_deleted: bool = False) -> list[Sample]:
        qs = orm.Sample.objects.prefetch_related("stems").filter(pack_id=pack_id.value)
        if not include_deleted:
            qs = qs.exclude(status=SampleStatus.DELETED.value)
        return [_to_sample(row) for row in qs]

    def next_sample_position(self, pack_id: PackId) -> int:
        current = orm.Sample.objects.filter(pack_id=pack_id.value).aggregate(top=Max("position"))["top"]
        return 0 if current is None else current + 1

    @_writes
    def insert_sample(self, pack_id: PackId, draft: SampleDraft, audio_url: str, position: int) -> Sample:
        row = orm.Sample.objects.create(
            pack_id=pack_id.value,
            name=draft.name.strip(),
            audio_url=audio_url,
            bpm=draft.bpm,
            key=draft.key or None,
            length=draft.length or None,
            sample_type=draft.sample_type.value,
            credit_cost=draft.credit_cost,
            file_size_bytes=draft.audio.size,
            has_stems=draft.uploads_stems,
            status=SampleStatus.ACTIVE.value,
            position=position,
            genre_id=draft.genre_id.value if draft.genre_id else None,
        )
        if draft.mood_ids:
            row.moods.set([m.value for m in draft.mood_ids])
        return _to_sample(row)

    @_writes
    def insert_stems(self, sample_id: SampleId, stems: Iterable[tuple[str, str, int | None]]) -> list[Stem]:
        rows = orm.Stem.objects.bulk_create(
            [
                orm.Stem(
                    sample_id=sample_id.value,
                    name=name,
                    audio_url=url,
                    file_size_bytes=size,
                    position=index,
                )
                for index, (name, url, size) in enumerate(stems)
            ]
        )
        return [_to_stem(row) for row in rows]

    @_writes
    def update_sample(self, edit: SampleEdit) -> None:
        orm.Sample.objects.filter(id=edit.sample_id.value).update(
            name=edit.name.strip(),
            bpm=edit.bpm,
            key=edit.key or None,
            length=edit.length or None,
            sample_type=edit.sample_type.value,
            credit_cost=edit.credit_cost,
            updated_at=timezone.now(),
        )

    @_writes
    def set_sample_status(self, sample_ids: Iterable[SampleId], status: SampleStatus) -> int:
        ids = [s.value for s in sample_ids]
        if not ids:
            return 0
        return orm.Sample.objects.filter(id__in=ids).update(
            status=status.value, updated_at=timezone.now()
        )

    def get_term(self, kind: TermKind, term_id: TermId) -> Term | None:
        row = TERM_MODELS[kind].objects.filter(id=term_id.value).first()
        return _to_term(kind, row) if row else None

    def missing_terms(self, kind: TermKind, term_ids: Iterable[TermId]) -> list[TermId]:
        wanted = list(term_ids)
        found = set(
            TERM_MODELS[kind].objects.filter(id__in=[t.value for t in wanted]).values_list("id", flat=True)
        )
        return [t for t in wanted if t.value not in found]

    @_writes
    def set_term_active(self, kind: TermKind, term_id: TermId, active: bool) -> None:
        TERM_MODELS[kind].objects.filter(id=term_id.value).update(is_active=active)

    @_writes
    def delete_term(self, kind: TermKind, term_id: TermId) -> None:
        TERM_MODELS[kind].objects.filter(id=term_id.value).delete()

    def count_packs_for_category(self, term_id: TermId) -> int:
        return orm.Pack.objects.filter(category_id=term_id.value).count()

    def count_packs_for_creator(self, term_id: TermId) -> int:
        return orm.Pack.objects.filter(creator_id=term_id.value).count()

    def count_genre_usage(self, term_id: TermId) -> int:
        packs = orm.PackGenre.objects.filter(genre_id=term_id.value).count()
        samples = orm.Sample.objects.filter(genre_id=term_id.value).count()
        return packs + samples

    def count_mood_usage(self, term_id: TermId) -> int:
        return orm.Sample.objects.filter(moods__id=term_id.value).count()

    def count_sample_downloads(self, pack_id: PackId) -> int:
        total = orm.Sample.objects.filter(pack_id=pack_id.value).aggregate(total=Sum("download_count"))["total"]
        return total or 0
