"""Abstract storage interfaces for the migration source and destination.

The migrator only needs three capabilities: list and get on the source side,
put on the destination side. Keeping them behind these interfaces lets the
transfer logic run against in-memory fakes in tests and lets other backends
be swapped in without touching it.
"""

from abc import ABC, abstractmethod
from typing import List

from mediamover.objects.storage_object import StorageObject


class SourceStorage(ABC):
    """Read-only access to a storage service with multiple named buckets.

    Example implementations:
        - SupabaseStorageManager: Supabase Storage
    """

    @abstractmethod
    def list_objects(self, bucket: str, path: str = "", limit: int = 100, offset: int = 0) -> List[StorageObject]:
        """List one page of entries under a path in a bucket.

        Args:
            bucket: Source bucket name
            path: Folder path inside the bucket, "" for the root
            limit: Maximum number of entries in the page
            offset: Number of entries to skip

        Returns:
            Entries in the page, fewer than `limit` on the last page

        Raises:
            ListingError: If the bucket cannot be listed
        """
        pass

    @abstractmethod
    def download_object(self, bucket: str, name: str) -> bytes:
        """Download the payload of one object.

        Raises:
            DownloadError: If the object cannot be read
        """
        pass

    def list_all_objects(self, bucket: str, path: str = "", page_size: int = 100) -> List[StorageObject]:
        """List every entry under a path, following offset pagination.

        Requests pages of `page_size` until a short page is returned.

        Raises:
            ListingError: If any page cannot be listed
        """
        entries: List[StorageObject] = []
        offset = 0
        while True:
            page = self.list_objects(bucket, path=path, limit=page_size, offset=offset)
            entries.extend(page)
            if len(page) < page_size:
                return entries
            offset += len(page)

    @property
    @abstractmethod
    def has_error(self) -> bool:
        """True if the provider could not connect to its backend."""
        pass


class DestinationStorage(ABC):
    """Write access to a single destination bucket.

    Example implementations:
        - R2Manager: Cloudflare R2 / any S3-compatible service
    """

    @abstractmethod
    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Create or overwrite an object.

        Implementations validate the key with `validate_object_key` before
        any write.

        Raises:
            UploadError: If the key is invalid or the destination rejects the write
        """
        pass

    @property
    @abstractmethod
    def has_error(self) -> bool:
        """True if the provider could not connect to its backend."""
        pass

    @property
    @abstractmethod
    def bucket_name(self) -> str:
        """Name of the destination bucket."""
        pass
