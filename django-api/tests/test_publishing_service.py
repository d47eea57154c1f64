"""Tests for PackPublishingService and the aggregate writer.

Run with: pytest tests/test_publishing_service.py -v
"""

from dataclasses import replace
from uuid import uuid4

import pytest

from common.errors import InvalidTransitionError, NotFoundError, UploadError, ValidationError, WriteError
from catalog import models as orm
from catalog.domain import PackStatus, SampleId, SampleStatus, SampleType, TermId
from catalog.domain.submissions import PackEdit, PackSubmission, SampleEdit, UploadLimits
from catalog.services import AssetUploader, PackPublishingService
from catalog.stores.django_store import DjangoCatalogStore
from conftest import MemoryObjectStore, audio, cover, draft


class StemRejectingStore(DjangoCatalogStore):
    """Store whose stem insert fails after the pack and samples were written."""

    def insert_stems(self, sample_id, stems):
        raise WriteError("insert stems failed: disk full")


@pytest.fixture
def store():
    return DjangoCatalogStore()


@pytest.fixture
def service(store, object_store):
    return PackPublishingService(store, AssetUploader(object_store))


@pytest.mark.django_db
class TestCreatePack:
    """Tests for PackPublishingService.create_pack."""

    def test_creates_pack_genres_samples_and_stems(self, service, store, object_store, pack_fields, mood):
        progress = []
        submission = PackSubmission(
            fields=pack_fields,
            status=PackStatus.PUBLISHED,
            cover=cover(),
            samples=(
                draft("kick", bpm=124, credit_cost=2, mood_ids=(TermId(mood.id),)),
                draft("loop", stems=(audio("bass.wav"), audio("keys.wav"))),
            ),
        )

        pack = service.create_pack(submission, on_progress=progress.append)

        assert pack.status == PackStatus.PUBLISHED
        assert pack.cover_url in object_store.objects
        assert pack.genre_ids == pack_fields.genre_ids
        assert pack.tags == ("drums", "house")
        samples = store.list_samples(pack.id)
        assert [s.name for s in samples] == ["kick", "loop"]
        assert all(s.status == SampleStatus.ACTIVE for s in samples)
        assert samples[0].bpm == 124
        assert samples[0].has_stems is False
        assert samples[1].has_stems is True
        assert [stem.name for stem in samples[1].stems] == ["bass", "keys"]
        assert orm.Sample.objects.get(id=samples[0].id.value).moods.count() == 1
        assert progress[-1] == 100
        assert progress == sorted(progress)

    def test_draft_without_samples(self, service, pack_fields, object_store):
        pack = service.create_pack(PackSubmission(fields=pack_fields))
        assert pack.status == PackStatus.DRAFT
        assert pack.cover_url is None
        assert object_store.objects == {}

    def test_validation_happens_before_uploads(self, service, pack_fields, object_store):
        submission = PackSubmission(
            fields=pack_fields, status=PackStatus.PUBLISHED, cover=cover()
        )
        with pytest.raises(ValidationError):
            service.create_pack(submission)
        assert object_store.objects == {}

    def test_cover_over_limit_rejected(self, store, object_store, pack_fields):
        service = PackPublishingService(
            store, AssetUploader(object_store), limits=UploadLimits(cover_max_bytes=1024 * 1024)
        )
        submission = PackSubmission(fields=pack_fields, cover=cover(size=2 * 1024 * 1024))
        with pytest.raises(ValidationError) as exc:
            service.create_pack(submission)
        assert exc.value.message == "File size exceeds 1MB limit."

    def test_unknown_genre_rejected(self, service, pack_fields):
        fields = replace(pack_fields, genre_ids=(TermId(uuid4()),))
        with pytest.raises(ValidationError) as exc:
            service.create_pack(PackSubmission(fields=fields))
        assert exc.value.field_name == "genre"
        assert orm.Pack.objects.count() == 0

    def test_duplicate_genres_rejected_before_uploads(self, service, pack_fields, object_store):
        fields = replace(pack_fields, genre_ids=pack_fields.genre_ids * 2)
        submission = PackSubmission(fields=fields, cover=cover(), samples=(draft("kick"),))

        with pytest.raises(ValidationError) as exc:
            service.create_pack(submission)

        assert exc.value.field_name == "genre_ids"
        assert object_store.objects == {}
        assert orm.Pack.objects.count() == 0

    def test_upload_failure_writes_nothing(self, store, pack_fields):
        object_store = MemoryObjectStore(fail_on={b"broken"})
        service = PackPublishingService(store, AssetUploader(object_store))
        submission = PackSubmission(
            fields=pack_fields,
            status=PackStatus.PUBLISHED,
            samples=(draft("kick"), draft("loop", content=b"broken")),
        )

        with pytest.raises(UploadError) as exc:
            service.create_pack(submission)

        assert orm.Pack.objects.count() == 0
        assert orm.Sample.objects.count() == 0
        assert len(exc.value.orphaned_urls) == 1

    def test_write_failure_rolls_back_and_discards_uploads(self, object_store, pack_fields):
        service = PackPublishingService(StemRejectingStore(), AssetUploader(object_store))
        submission = PackSubmission(
            fields=pack_fields,
            status=PackStatus.PUBLISHED,
            cover=cover(),
            samples=(draft("loop", stems=(audio("bass.wav"),)),),
        )

        with pytest.raises(WriteError):
            service.create_pack(submission)

        assert orm.Pack.objects.count() == 0
        assert orm.PackGenre.objects.count() == 0
        assert orm.Sample.objects.count() == 0
        assert object_store.objects == {}
        assert len(object_store.deleted) == 3


@pytest.mark.django_db
class TestEditPack:
    """Tests for PackPublishingService.edit_pack."""

    @pytest.fixture
    def pack(self, service, pack_fields):
        return service.create_pack(
            PackSubmission(
                fields=pack_fields,
                status=PackStatus.PUBLISHED,
                samples=(draft("A"), draft("B", bpm=90), draft("C")),
            )
        )

    def samples_by_name(self, store, pack):
        return {s.name: s for s in store.list_samples(pack.id, include_deleted=True)}

    def test_three_way_diff(self, service, store, pack, pack_fields):
        """Remove A, change B's bpm, add D: A soft-deleted, B updated, C untouched, D active."""
        before = self.samples_by_name(store, pack)
        a, b, c = before["A"], before["B"], before["C"]

        updated = service.edit_pack(
            str(pack.id),
            PackEdit(
                fields=pack_fields,
                removed_sample_ids=(a.id,),
                sample_edits=(
                    SampleEdit(sample_id=b.id, name="B", sample_type=SampleType.LOOP, bpm=120),
                ),
                new_samples=(draft("D"),),
            ),
        )

        after = self.samples_by_name(store, pack)
        assert after["A"].status == SampleStatus.DELETED
        assert after["A"].updated_at > a.updated_at
        assert after["B"].bpm == 120
        assert after["B"].updated_at > b.updated_at
        assert after["C"] == c
        assert after["D"].status == SampleStatus.ACTIVE
        assert updated.updated_at > pack.updated_at
        assert orm.Sample.objects.filter(id=a.id.value).exists()
        assert [s.name for s in store.list_samples(pack.id)] == ["B", "C", "D"]

    def test_edit_of_removed_sample_is_ignored(self, service, store, pack, pack_fields):
        a = self.samples_by_name(store, pack)["A"]
        service.edit_pack(
            str(pack.id),
            PackEdit(
                fields=pack_fields,
                removed_sample_ids=(a.id,),
                sample_edits=(SampleEdit(sample_id=a.id, name="A2", sample_type=SampleType.LOOP),),
            ),
        )
        after = self.samples_by_name(store, pack)
        assert after["A"].status == SampleStatus.DELETED
        assert "A2" not in after

    def test_new_samples_appended_after_existing(self, service, store, pack, pack_fields):
        service.edit_pack(str(pack.id), PackEdit(fields=pack_fields, new_samples=(draft("D"),)))
        assert [s.name for s in store.list_samples(pack.id)] == ["A", "B", "C", "D"]

    def test_pack_fields_and_genres_replaced(self, service, pack, pack_fields):
        techno = orm.Genre.objects.create(name="Techno")
        fields = replace(
            pack_fields,
            name="Warehouse Drums Vol. 2",
            genre_ids=(TermId(techno.id),),
            is_premium=True,
        )

        updated = service.edit_pack(str(pack.id), PackEdit(fields=fields))

        assert updated.name == "Warehouse Drums Vol. 2"
        assert updated.is_premium is True
        assert updated.genre_ids == (TermId(techno.id),)
        assert orm.PackGenre.objects.filter(pack_id=pack.id.value).count() == 1

    def test_cover_kept_when_not_replaced(self, service, store, pack_fields, object_store):
        pack = service.create_pack(PackSubmission(fields=pack_fields, cover=cover()))
        updated = service.edit_pack(str(pack.id), PackEdit(fields=pack_fields))
        assert updated.cover_url == pack.cover_url

    def test_duplicate_genres_rejected(self, service, pack, pack_fields, object_store):
        uploaded = dict(object_store.objects)
        fields = replace(pack_fields, genre_ids=pack_fields.genre_ids * 2)

        with pytest.raises(ValidationError) as exc:
            service.edit_pack(str(pack.id), PackEdit(fields=fields, new_samples=(draft("D"),)))

        assert exc.value.message == "Each genre can only be selected once"
        assert object_store.objects == uploaded
        assert orm.PackGenre.objects.filter(pack_id=pack.id.value).count() == 1

    def test_foreign_sample_rejected(self, service, pack, pack_fields):
        with pytest.raises(ValidationError):
            service.edit_pack(
                str(pack.id),
                PackEdit(fields=pack_fields, removed_sample_ids=(SampleId(uuid4()),)),
            )

    def test_removing_every_sample_of_published_pack_keeps_it_published(self, service, store, pack, pack_fields):
        """Soft deletes never change the pack status on their own."""
        ids = tuple(s.id for s in store.list_samples(pack.id))
        updated = service.edit_pack(str(pack.id), PackEdit(fields=pack_fields, removed_sample_ids=ids))
        assert updated.status == PackStatus.PUBLISHED
        assert store.list_samples(pack.id) == []

    def test_status_change_checked_against_lifecycle(self, service, pack, pack_fields):
        with pytest.raises(InvalidTransitionError):
            service.edit_pack(str(pack.id), PackEdit(fields=pack_fields, status=PackStatus.DRAFT))

    def test_status_change_applied(self, service, pack, pack_fields):
        updated = service.edit_pack(
            str(pack.id), PackEdit(fields=pack_fields, status=PackStatus.DISABLED)
        )
        assert updated.status == PackStatus.DISABLED

    def test_unknown_pack(self, service, pack_fields):
        with pytest.raises(NotFoundError):
            service.edit_pack(str(uuid4()), PackEdit(fields=pack_fields))
