"""Image upload coordination for event creation.

Upload runs before the event record is written; if the write fails the
uploaded blob is deleted again so no event points at a missing image and
orphaned blobs stay rare.
"""

import logging
from typing import BinaryIO

from events.domain.errors import UploadError
from events.stores.interfaces import BlobStore, StoredBlob

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "DevEvent"


class ImageUploadCoordinator:
    """Uploads event images and compensates failed record writes."""

    def __init__(self, blobs: BlobStore, namespace: str = DEFAULT_NAMESPACE) -> None:
        self._blobs = blobs
        self._namespace = namespace

    def upload(self, content: BinaryIO, filename: str) -> StoredBlob:
        """Transfer an image to the blob store.

        Raises:
            UploadError: On any transport or provider failure.
        """
        try:
            return self._blobs.upload(content, filename, self._namespace)
        except Exception as exc:
            logger.error("Image upload failed for %s: %s", filename, exc)
            raise UploadError(str(exc) or type(exc).__name__) from exc

    def rollback(self, asset_id: str) -> None:
        """Best-effort delete of an uploaded image; failures are logged only."""
        try:
            self._blobs.delete(asset_id)
        except Exception:
            logger.warning("Rollback of uploaded image %s failed", asset_id, exc_info=True)
        else:
            logger.info("Rolled back uploaded image %s", asset_id)
