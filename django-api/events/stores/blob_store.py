"""Blob store backed by Django's storage API.

Which backend holds the images (local filesystem, an object store through a
third-party storage class) is decided by the ``STORAGES`` setting.
"""

import logging
import posixpath
import uuid
from typing import BinaryIO

from django.core.files import File
from django.core.files.storage import Storage, storages

from events.stores.interfaces import BlobStore, StoredBlob

logger = logging.getLogger(__name__)


class StorageBlobStore(BlobStore):
    """Saves blobs through a configured Django storage backend."""

    def __init__(self, alias: str = "default", storage: Storage | None = None) -> None:
        self._storage = storage if storage is not None else storages[alias]

    def upload(self, content: BinaryIO, filename: str, namespace: str) -> StoredBlob:
        extension = posixpath.splitext(filename)[1].lower()
        name = posixpath.join(namespace, f"{uuid.uuid4().hex}{extension}")
        saved_name = self._storage.save(name, File(content, name=filename))
        logger.info("Uploaded %s as %s", filename, saved_name)
        return StoredBlob(url=self._storage.url(saved_name), asset_id=saved_name)

    def delete(self, asset_id: str) -> None:
        self._storage.delete(asset_id)
        logger.info("Deleted blob %s", asset_id)
