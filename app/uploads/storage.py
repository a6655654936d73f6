"""Cloud Storage wrapper.

Uploads go to the Firebase default bucket (or STORAGE_BUCKET) through the
google-cloud-storage client bundled with firebase-admin.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import BinaryIO

from firebase_admin import storage as firebase_storage
from google.api_core.exceptions import GoogleAPIError, NotFound
from google.cloud.storage import Bucket

from app.uploads.exceptions import StorageError

logger = logging.getLogger(__name__)

PUBLIC_URL_BASE = "https://storage.googleapis.com"
# Resumable uploads require a multiple of 256 KiB
UPLOAD_CHUNK_SIZE = 4 * 256 * 1024


@dataclass(frozen=True)
class UploadResult:
    """Where an uploaded object ended up."""

    url: str
    file_name: str
    bucket: str


class StorageService:
    """Thin wrapper over a Cloud Storage bucket.

    Methods are blocking; call them from a worker thread in async code.
    """

    def __init__(self, bucket: Bucket):
        self._bucket = bucket

    @property
    def bucket_name(self) -> str:
        return self._bucket.name

    def public_url(self, path: str) -> str:
        return f"{PUBLIC_URL_BASE}/{self.bucket_name}/{path}"

    def path_from_url(self, url: str) -> str | None:
        """Object path for a URL produced by public_url, else None."""
        prefix = f"{PUBLIC_URL_BASE}/{self.bucket_name}/"
        if not url.startswith(prefix):
            return None
        return url.removeprefix(prefix) or None

    def upload(
        self,
        fileobj: BinaryIO,
        path: str,
        content_type: str,
        *,
        public: bool = True,
        cache_control: str | None = None,
    ) -> UploadResult:
        """Stream ``fileobj`` to ``path`` in fixed-size chunks.

        Raises:
            StorageError: If the upload or the ACL change fails
        """
        blob = self._bucket.blob(path, chunk_size=UPLOAD_CHUNK_SIZE)
        if cache_control:
            blob.cache_control = cache_control
        try:
            blob.upload_from_file(fileobj, content_type=content_type, rewind=True)
            if public:
                blob.make_public()
        except GoogleAPIError as e:
            logger.error("Upload of %s failed: %s", path, e)
            raise StorageError(f"Upload failed: {path}") from e

        url = self.public_url(path)
        logger.info("File uploaded: %s", url)
        return UploadResult(url=url, file_name=path, bucket=self.bucket_name)

    def delete(self, path: str) -> None:
        """Delete the object at ``path``; a missing object is not an error.

        Raises:
            StorageError: If storage rejects the deletion
        """
        try:
            self._bucket.blob(path).delete()
        except NotFound:
            logger.warning("File not found for deletion: %s", path)
            return
        except GoogleAPIError as e:
            raise StorageError(f"Failed to delete file: {path}") from e
        logger.info("File deleted: %s", path)

    def delete_by_url(self, url: str | None) -> None:
        """Best-effort cleanup of an object previously returned by upload.

        URLs outside this bucket are ignored. Failures are logged, not raised.
        """
        if not url:
            return
        path = self.path_from_url(url)
        if path is None:
            return
        try:
            self.delete(path)
        except StorageError as e:
            logger.error("Failed to delete %s: %s", url, e)


@lru_cache
def get_storage_service() -> StorageService:
    """Get cached storage service bound to the default bucket.

    Requires the Firebase Admin SDK to be initialized with a storage bucket.
    """
    return StorageService(firebase_storage.bucket())
