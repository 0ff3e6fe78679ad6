# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles avatar and media files in the storage bucket (lab-upload).
# Paths look like avatars/<id>/<filename> and media/<artist_id>/<filename>.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from lib.utils import storage_path_from_url
from app.config import settings
from app.exceptions import StorageUploadError, StorageDeleteError

logger = logging.getLogger(__name__)


class StorageService:
    """
    Service for Supabase Storage operations.

    All files live in a single bucket, configured by STORAGE_BUCKET.
    """

    @staticmethod
    def bucket_name() -> str:
        return settings.STORAGE_BUCKET

    @staticmethod
    def upload(
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """
        Upload raw file content to storage.

        Args:
            path: Object path inside the bucket
            content: File bytes
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at the same path

        Returns:
            Storage path where the file was uploaded

        Raises:
            StorageUploadError: If upload fails
        """
        client = SupabaseClient.get_client()
        bucket = StorageService.bucket_name()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={
                    "content-type": content_type,
                    "cache-control": "3600",
                    "upsert": "true" if upsert else "false",
                }
            )

            logger.info(f"Uploaded file to storage: {bucket}/{path}")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageUploadError(str(e), path=path)

    @staticmethod
    def get_public_url(storage_path: str) -> str:
        """
        Get a public URL for a storage file.

        Args:
            storage_path: Path in storage bucket

        Returns:
            Public URL string
        """
        client = SupabaseClient.get_client()

        try:
            return client.storage.from_(StorageService.bucket_name()).get_public_url(storage_path)
        except Exception as e:
            logger.error(f"Failed to get public URL: {e}")
            raise StorageUploadError(str(e), path=storage_path)

    @staticmethod
    def upload_public(
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Upload a file and return its public URL."""
        StorageService.upload(path, content, content_type, upsert=upsert)
        return StorageService.get_public_url(path)

    @staticmethod
    def remove(storage_paths: list[str]) -> int:
        """
        Delete files from storage.

        Args:
            storage_paths: Paths in the storage bucket

        Returns:
            Number of paths sent for removal

        Raises:
            StorageDeleteError: If removal fails
        """
        if not storage_paths:
            return 0

        client = SupabaseClient.get_client()

        try:
            client.storage.from_(StorageService.bucket_name()).remove(storage_paths)
            logger.info(f"Deleted {len(storage_paths)} files from storage")
            return len(storage_paths)

        except Exception as e:
            logger.error(f"Storage deletion failed: {e}")
            raise StorageDeleteError(str(e), paths=storage_paths)

    @staticmethod
    def paths_from_urls(urls: list[str]) -> list[str]:
        """
        Derive bucket paths from public URLs, skipping URLs outside the bucket.
        """
        bucket = StorageService.bucket_name()
        paths = []
        for url in urls:
            path = storage_path_from_url(url, bucket)
            if path:
                paths.append(path)
            else:
                logger.warning(f"URL is not in bucket {bucket}, skipping: {url}")
        return paths
