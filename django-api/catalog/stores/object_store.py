"""Blob storage for covers, sample audio and stems."""

import logging
from abc import ABC, abstractmethod

from asgiref.sync import sync_to_async
from django.core.files.base import ContentFile
from django.core.files.storage import Storage, default_storage

logger = logging.getLogger(__name__)


class ObjectStore(ABC):
    """Interface for the content store that serves uploaded assets."""

    @abstractmethod
    async def put(self, content: bytes, name: str) -> str:
        """Store bytes under name and return an addressable URL.

        Raises whatever the backend raises; the uploader maps it.
        """
        ...

    @abstractmethod
    async def delete(self, url: str) -> None:
        """Remove the asset at url. Implementations log failures and return."""
        ...


class DjangoStorageObjectStore(ObjectStore):
    """ObjectStore backed by a Django storage (default: STORAGES["default"]).

    Storage calls run on worker threads so that concurrent puts overlap.
    """

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage or default_storage

    def _save(self, content: bytes, name: str) -> str:
        saved_name = self._storage.save(name, ContentFile(content))
        return self._storage.url(saved_name)

    def _name_for_url(self, url: str) -> str | None:
        base = self._storage.url("")
        if base and url.startswith(base):
            return url[len(base):]
        return None

    def _delete(self, url: str) -> None:
        name = self._name_for_url(url)
        if name is None:
            logger.warning("Cannot map %s to a stored object; skipping delete", url)
            return
        self._storage.delete(name)

    async def put(self, content: bytes, name: str) -> str:
        return await sync_to_async(self._save, thread_sensitive=False)(content, name)

    async def delete(self, url: str) -> None:
        try:
            await sync_to_async(self._delete, thread_sensitive=False)(url)
        except Exception as exc:
            logger.error("Failed to delete stored asset %s: %s", url, exc)
