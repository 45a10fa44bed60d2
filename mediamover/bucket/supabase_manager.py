"""Supabase Storage access for the migration source.

This module provides the SupabaseStorageManager class, which lists and
downloads objects from Supabase Storage buckets using the service_role key.
Backend failures are wrapped into ListingError / DownloadError so callers can
isolate them per bucket and per object.
"""

from typing import Any, List, Optional

from supabase import Client, create_client

from mediamover.bucket.storage_provider import SourceStorage
from mediamover.exceptions import DownloadError, ListingError
from mediamover.logging_config import get_logger
from mediamover.objects.app_config import SourceSettings
from mediamover.objects.storage_object import StorageObject

logger = get_logger(__name__)


class SupabaseStorageManager(SourceStorage):
    """Manager for Supabase Storage bucket operations.

    Attributes:
        client: Supabase client
        has_error: Flag indicating if initialization encountered errors
    """

    def __init__(self, settings: SourceSettings, client: Optional[Client] = None) -> None:
        """Create the Supabase client and verify access.

        Lists the project's buckets to check the URL and key. Sets
        has_error=True if that fails instead of raising, so commands can
        report the problem and abort cleanly.

        Args:
            settings: Supabase URL and service key
            client: Pre-built client (mainly for tests)
        """
        self.client = client or create_client(
            settings.supabase_url, settings.supabase_service_key.get_secret_value()
        )
        self._has_error = False
        try:
            for bucket in self.client.storage.list_buckets():
                logger.info(f"Found Supabase bucket: {_field(bucket, 'name')}")
        except Exception as e:
            logger.error(f"Error connecting to Supabase Storage at {settings.supabase_url}: {e}", exc_info=True)
            self._has_error = True

    @property
    def has_error(self) -> bool:
        return self._has_error

    def list_buckets(self) -> List[str]:
        """List all bucket names in the project."""
        return [_field(bucket, "name") for bucket in self.client.storage.list_buckets()]

    def list_objects(self, bucket: str, path: str = "", limit: int = 100, offset: int = 0) -> List[StorageObject]:
        """List one page of entries, sorted by name so offsets are stable."""
        options = {
            "limit": limit,
            "offset": offset,
            "sortBy": {"column": "name", "order": "asc"},
        }
        try:
            rows = self.client.storage.from_(bucket).list(path, options)
        except Exception as e:
            logger.error(f"Unable to list {bucket}/{path} (offset {offset}): {e}")
            raise ListingError(f"Unable to list bucket {bucket}: {e}", bucket=bucket) from e

        entries = [
            StorageObject(name=row["name"], id=row.get("id"), metadata=row.get("metadata"))
            for row in rows or []
        ]
        logger.debug(f"Listed {len(entries)} entries in {bucket}/{path} at offset {offset}")
        return entries

    def download_object(self, bucket: str, name: str) -> bytes:
        """Download an object through the authenticated API rather than the CDN."""
        try:
            payload = self.client.storage.from_(bucket).download(name)
        except Exception as e:
            raise DownloadError(
                f"Unable to download {bucket}/{name}: {e}", bucket=bucket, object_name=name
            ) from e
        logger.debug(f"Downloaded {bucket}/{name} ({len(payload)} bytes)")
        return payload


def _field(record: Any, name: str) -> Any:
    """Read a field from a bucket record, which is a dict or a model depending on client version."""
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)
