"""Asset uploader: one binary asset in, one addressable URL out."""

import logging
import secrets
import time

from common.errors import UploadError
from catalog.domain.submissions import AssetFile
from catalog.stores.object_store import ObjectStore

logger = logging.getLogger(__name__)

COVERS = "covers"
SAMPLES = "samples"
STEMS = "stems"


def object_name(asset: AssetFile, destination: str) -> str:
    """Unique object key: <destination>/<epoch-ms>-<random>.<ext>"""
    stamp = int(time.time() * 1000)
    suffix = asset.extension or ".bin"
    return f"{destination}/{stamp}-{secrets.token_hex(6)}{suffix}"


class AssetUploader:
    """Uploads single assets to the object store.

    Type and size checks happen before this is called. A failed upload writes
    nothing; calls are independent and safe to run concurrently.
    """

    def __init__(self, object_store: ObjectStore) -> None:
        self._object_store = object_store

    @property
    def object_store(self) -> ObjectStore:
        return self._object_store

    async def upload(self, asset: AssetFile, destination: str) -> str:
        """Upload one asset and return its URL.

        Raises:
            UploadError: If the object store rejects the upload.
        """
        name = object_name(asset, destination)
        try:
            url = await self._object_store.put(asset.content, name)
        except UploadError:
            raise
        except Exception as exc:
            logger.warning("Upload of %s to %s failed: %s", asset.name, destination, exc)
            raise UploadError(f"Upload failed: {exc}") from exc
        logger.debug("Uploaded %s as %s", asset.name, url)
        return url
