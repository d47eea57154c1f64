"""Pytest configuration and shared fixtures."""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from catalog.domain import SampleType, Tags, TermId
from catalog.domain.submissions import AssetFile, PackFields, SampleDraft
from catalog.stores.object_store import ObjectStore

WAV = b"RIFF\x24\x00\x00\x00WAVEfmt "
PNG = b"\x89PNG\r\n\x1a\n"


class MemoryObjectStore(ObjectStore):
    """ObjectStore double that keeps blobs in a dict.

    Any content listed in `fail_on` is rejected by put.
    """

    def __init__(self, fail_on=()) -> None:
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self._fail_on = set(fail_on)

    async def put(self, content: bytes, name: str) -> str:
        if content in self._fail_on:
            raise OSError(f"rejected {content.decode(errors='replace')}")
        url = f"/media/{name}"
        self.objects[url] = content
        return url

    async def delete(self, url: str) -> None:
        self.deleted.append(url)
        self.objects.pop(url, None)


def audio(name: str = "kick.wav", content: bytes = WAV) -> AssetFile:
    return AssetFile(name=name, content=content, content_type="audio/wav")


def cover(size: int = 0) -> AssetFile:
    return AssetFile(name="cover.png", content=PNG + b"\x00" * size, content_type="image/png")


def draft(name: str, content: bytes = WAV, stems: tuple[AssetFile, ...] = (), **extra) -> SampleDraft:
    return SampleDraft(
        name=name,
        audio=audio(f"{name}.wav", content),
        sample_type=extra.pop("sample_type", SampleType.LOOP),
        has_stems=bool(stems),
        stem_files=stems,
        **extra,
    )


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def admin_api_client(admin_user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture(autouse=True)
def memory_storage(settings):
    """Keep uploaded files out of MEDIA_ROOT."""
    settings.STORAGES = {
        "default": {"BACKEND": "django.core.files.storage.InMemoryStorage"},
        "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
    }
    settings.MEDIA_URL = "/media/"


@pytest.fixture
def object_store() -> MemoryObjectStore:
    return MemoryObjectStore()


@pytest.fixture
def creator(db):
    from catalog.models import Creator

    return Creator.objects.create(name="Night Shift Audio")


@pytest.fixture
def category(db):
    from catalog.models import Category

    return Category.objects.create(name="Drums")


@pytest.fixture
def genre(db):
    from catalog.models import Genre

    return Genre.objects.create(name="House")


@pytest.fixture
def mood(db):
    from catalog.models import Mood

    return Mood.objects.create(name="Dark")


@pytest.fixture
def pack_fields(creator, category, genre) -> PackFields:
    return PackFields(
        name="Warehouse Drums",
        creator_id=TermId(creator.id),
        category_id=TermId(category.id),
        genre_ids=(TermId(genre.id),),
        description="Dusty kicks and hats",
        tags=Tags.from_iterable(["drums", "house"]),
    )


@pytest.fixture
def wav_upload():
    def make(name: str = "kick.wav", content: bytes = WAV) -> SimpleUploadedFile:
        return SimpleUploadedFile(name, content, content_type="audio/wav")

    return make
