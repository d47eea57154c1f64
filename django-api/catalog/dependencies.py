"""Service wiring for the catalog handlers."""

from django.conf import settings

from catalog.domain.submissions import UploadLimits
from catalog.services import (
    AssetUploader,
    DeletionGuard,
    LifecycleService,
    PackPublishingService,
)
from catalog.stores.django_store import DjangoCatalogStore
from catalog.stores.interfaces import CatalogStore
from catalog.stores.object_store import DjangoStorageObjectStore, ObjectStore


def upload_limits() -> UploadLimits:
    config = getattr(settings, "CATALOG", {})
    return UploadLimits(cover_max_bytes=config.get("COVER_MAX_BYTES", UploadLimits.cover_max_bytes))


def catalog_store() -> CatalogStore:
    return DjangoCatalogStore()


def object_store() -> ObjectStore:
    return DjangoStorageObjectStore()


def publishing_service() -> PackPublishingService:
    return PackPublishingService(
        catalog_store(),
        AssetUploader(object_store()),
        limits=upload_limits(),
    )


def lifecycle_service() -> LifecycleService:
    return LifecycleService(catalog_store())


def deletion_guard() -> DeletionGuard:
    return DeletionGuard(catalog_store())
