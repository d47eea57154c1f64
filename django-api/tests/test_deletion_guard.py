"""Tests for DeletionGuard and blob cleanup after pack deletes.

Run with: pytest tests/test_deletion_guard.py -v
"""

from uuid import uuid4

import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from common.errors import EntityInUseError, InvalidIdError, NotFoundError, ValidationError
from catalog import models as orm
from catalog.domain import PackStatus, TermId, TermKind
from catalog.domain.submissions import PackSubmission
from catalog.services import AssetUploader, DeletionGuard, PackPublishingService
from catalog.stores.django_store import DjangoCatalogStore
from conftest import draft


@pytest.fixture
def guard():
    return DeletionGuard(DjangoCatalogStore())


@pytest.fixture
def pack(object_store, pack_fields):
    service = PackPublishingService(DjangoCatalogStore(), AssetUploader(object_store))
    return service.create_pack(
        PackSubmission(fields=pack_fields, status=PackStatus.PUBLISHED, samples=(draft("kick"),))
    )


@pytest.mark.django_db
class TestDeletionGuard:
    """Tests for DeletionGuard."""

    def test_category_in_use_cannot_be_deleted(self, guard, category, pack):
        with pytest.raises(EntityInUseError) as exc:
            guard.delete("category", str(category.id))
        assert exc.value.message == (
            "Cannot delete category: 1 pack(s) still reference it. Disable it instead."
        )
        assert orm.Category.objects.filter(id=category.id).exists()

    def test_unused_category_deleted(self, guard):
        unused = orm.Category.objects.create(name="Vocals")
        assert guard.can_delete(TermKind.CATEGORY, str(unused.id))
        guard.delete(TermKind.CATEGORY, str(unused.id))
        assert not orm.Category.objects.filter(id=unused.id).exists()

    def test_creator_usage_counts_packs(self, guard, creator, pack):
        assert guard.usage_count("creator", str(creator.id)) == 1

    def test_genre_usage_counts_packs_and_samples(self, guard, genre, object_store, pack_fields):
        service = PackPublishingService(DjangoCatalogStore(), AssetUploader(object_store))
        service.create_pack(
            PackSubmission(
                fields=pack_fields,
                samples=(draft("kick", genre_id=TermId(genre.id)), draft("snare")),
            )
        )
        assert guard.usage_count("genre", str(genre.id)) == 2

    def test_mood_usage_counts_samples(self, guard, mood, object_store, pack_fields):
        service = PackPublishingService(DjangoCatalogStore(), AssetUploader(object_store))
        service.create_pack(
            PackSubmission(fields=pack_fields, samples=(draft("kick", mood_ids=(TermId(mood.id),)),))
        )
        with pytest.raises(EntityInUseError):
            guard.delete("mood", str(mood.id))

    def test_disable_instead_of_delete(self, guard, category, pack):
        guard.set_active("category", str(category.id), False)
        category.refresh_from_db()
        assert category.is_active is False

    def test_pack_with_downloads_cannot_be_deleted(self, guard, pack):
        orm.Pack.objects.filter(id=pack.id.value).update(download_count=3)
        with pytest.raises(EntityInUseError) as exc:
            guard.delete("pack", str(pack.id))
        assert "3 download(s)" in exc.value.message

    def test_sample_downloads_block_pack_delete(self, guard, pack):
        """A pack whose own counter is zero is still kept while its samples were downloaded."""
        orm.Sample.objects.filter(pack_id=pack.id.value).update(download_count=2)

        assert guard.usage_count("pack", str(pack.id)) == 2
        with pytest.raises(EntityInUseError):
            guard.delete("pack", str(pack.id))
        assert orm.Pack.objects.filter(id=pack.id.value).exists()

    def test_pack_without_downloads_deleted_with_samples(self, guard, pack):
        guard.delete("pack", str(pack.id))
        assert not orm.Pack.objects.filter(id=pack.id.value).exists()
        assert orm.Sample.objects.count() == 0

    def test_pack_cannot_be_toggled(self, guard, pack):
        with pytest.raises(ValidationError):
            guard.set_active("pack", str(pack.id), False)

    def test_unknown_entity_type(self, guard):
        with pytest.raises(ValidationError):
            guard.usage_count("playlist", str(uuid4()))

    def test_malformed_id(self, guard):
        with pytest.raises(InvalidIdError):
            guard.usage_count("genre", "42")

    def test_missing_entity(self, guard):
        with pytest.raises(NotFoundError):
            guard.delete("genre", str(uuid4()))


@pytest.mark.django_db
class TestBlobCleanup:
    """Deleted packs release their stored files once the delete commits."""

    def test_files_removed_after_commit(self, guard, pack_fields, django_capture_on_commit_callbacks):
        cover_name = default_storage.save("covers/1-abc.png", ContentFile(b"png"))
        audio_name = default_storage.save("samples/1-def.wav", ContentFile(b"wav"))
        pack = orm.Pack.objects.create(
            name="Old Pack",
            creator_id=pack_fields.creator_id.value,
            category_id=pack_fields.category_id.value,
            cover_url=default_storage.url(cover_name),
        )
        orm.Sample.objects.create(pack=pack, name="kick", audio_url=default_storage.url(audio_name))

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            guard.delete("pack", str(pack.id))

        assert len(callbacks) == 2
        assert not default_storage.exists(cover_name)
        assert not default_storage.exists(audio_name)

    def test_nothing_removed_when_delete_refused(self, guard, pack_fields, django_capture_on_commit_callbacks):
        name = default_storage.save("covers/2-abc.png", ContentFile(b"png"))
        pack = orm.Pack.objects.create(
            name="Popular Pack",
            creator_id=pack_fields.creator_id.value,
            category_id=pack_fields.category_id.value,
            cover_url=default_storage.url(name),
            download_count=10,
        )

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(EntityInUseError):
                guard.delete("pack", str(pack.id))

        assert callbacks == []
        assert default_storage.exists(name)
