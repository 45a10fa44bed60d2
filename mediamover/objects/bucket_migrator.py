"""Batch object migration between two storage services.

Copies every file object from a list of source buckets into one destination
bucket, keyed as `{source_bucket}/{object_name}`. Runs strictly one bucket
and one object at a time. Listing, download and upload failures are caught
per bucket or per object, logged, recorded in the report, and the run moves
on. Source objects are never modified.
"""

from typing import Callable, Iterable, List, Optional

from mediamover.bucket.storage_provider import DestinationStorage, SourceStorage
from mediamover.exceptions import StorageOperationError
from mediamover.logging_config import get_logger
from mediamover.objects.app_config import DEFAULT_PAGE_SIZE
from mediamover.objects.content_type import infer_content_type
from mediamover.objects.source_config import EMPTY_FOLDER_PLACEHOLDER
from mediamover.objects.storage_object import (
    BucketReport,
    MigrationReport,
    StorageObject,
    TransferOutcome,
    TransferStatus,
)

logger = get_logger(__name__)

OutcomeCallback = Callable[[TransferOutcome], None]
BucketCallback = Callable[[BucketReport], None]


def derive_destination_key(bucket: str, object_name: str) -> str:
    """Build the destination key for an object.

    Prefixing with the source bucket keeps same-named objects from different
    buckets apart.

    Example:
        >>> derive_destination_key("play-images", "hamlet.png")
        'play-images/hamlet.png'
    """
    return f"{bucket}/{object_name}"


class BucketMigrator:
    """Sequential copier from a SourceStorage into a DestinationStorage.

    Attributes:
        source: Source service (list and get)
        destination: Destination bucket (put)
        skip_names: Object names never transferred (empty-folder sentinels)
        page_size: Entries requested per listing page
    """

    def __init__(
        self,
        source: SourceStorage,
        destination: Optional[DestinationStorage],
        skip_names: Optional[Iterable[str]] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        on_outcome: Optional[OutcomeCallback] = None,
        on_bucket_listed: Optional[BucketCallback] = None,
    ) -> None:
        """Create a migrator.

        Args:
            source: Where objects are read from
            destination: Where objects are written; may be None for planning only
            skip_names: Names to skip (default: the empty-folder placeholder)
            page_size: Listing page size
            on_outcome: Called after each object is processed
            on_bucket_listed: Called once a bucket's listing finished, before transfers
        """
        self.source = source
        self.destination = destination
        self.skip_names = set(skip_names) if skip_names is not None else {EMPTY_FOLDER_PLACEHOLDER}
        self.page_size = page_size
        self.on_outcome = on_outcome
        self.on_bucket_listed = on_bucket_listed

    def is_transferable(self, entry: StorageObject) -> bool:
        """Return True for file entries that are not skip-listed."""
        return entry.is_file and entry.name not in self.skip_names

    def plan_bucket(self, bucket: str) -> List[StorageObject]:
        """List every page of a bucket root and keep only transferable entries.

        Raises:
            ListingError: If the bucket cannot be listed
        """
        entries = self.source.list_all_objects(bucket, path="", page_size=self.page_size)
        planned = []
        for entry in entries:
            if self.is_transferable(entry):
                planned.append(entry)
            else:
                logger.debug(f"Skipping non-file entry {bucket}/{entry.name}")
        return planned

    def migrate_object(self, bucket: str, entry: StorageObject) -> TransferOutcome:
        """Download one object and upload it under its destination key.

        Never raises for storage failures; they are returned as outcomes.
        """
        if self.destination is None:
            raise ValueError("A destination is required to migrate objects")

        destination_key = derive_destination_key(bucket, entry.name)
        outcome = TransferOutcome(
            source_bucket=bucket,
            object_name=entry.name,
            destination_key=destination_key,
            status=TransferStatus.UPLOADED,
        )

        try:
            payload = self.source.download_object(bucket, entry.name)
        except StorageOperationError as e:
            logger.error(f"Download failed for {bucket}/{entry.name}: {e}")
            outcome.status = TransferStatus.DOWNLOAD_FAILED
            outcome.error_message = str(e)
            return outcome

        outcome.size_bytes = len(payload)
        outcome.content_type = infer_content_type(entry.name)

        try:
            self.destination.put_object(destination_key, payload, outcome.content_type)
        except StorageOperationError as e:
            logger.error(f"Upload failed for {bucket}/{entry.name} -> {destination_key}: {e}")
            outcome.status = TransferStatus.UPLOAD_FAILED
            outcome.error_message = str(e)
            return outcome

        logger.debug(f"Migrated {bucket}/{entry.name} -> {destination_key}")
        return outcome

    def migrate_bucket(self, bucket: str) -> BucketReport:
        """Migrate all transferable objects in one bucket."""
        report = BucketReport(bucket=bucket)
        try:
            entries = self.source.list_all_objects(bucket, path="", page_size=self.page_size)
        except StorageOperationError as e:
            logger.error(f"Listing failed for bucket {bucket}, skipping it: {e}")
            report.listing_error = str(e)
            if self.on_bucket_listed:
                self.on_bucket_listed(report)
            return report

        report.listed_count = len(entries)
        logger.info(f"Bucket {bucket}: {len(entries)} entries listed")
        if self.on_bucket_listed:
            self.on_bucket_listed(report)

        for entry in entries:
            if self.is_transferable(entry):
                outcome = self.migrate_object(bucket, entry)
            else:
                logger.debug(f"Skipping non-file entry {bucket}/{entry.name}")
                outcome = TransferOutcome(
                    source_bucket=bucket,
                    object_name=entry.name,
                    destination_key=derive_destination_key(bucket, entry.name),
                    status=TransferStatus.SKIPPED,
                )
            report.outcomes.append(outcome)
            if self.on_outcome:
                self.on_outcome(outcome)

        return report

    def run(self, buckets: Iterable[str]) -> MigrationReport:
        """Migrate each bucket in turn and collect the reports."""
        report = MigrationReport()
        for bucket in buckets:
            report.buckets.append(self.migrate_bucket(bucket))

        logger.info(
            f"Migration finished: {report.uploaded_count} uploaded, "
            f"{report.skipped_count} skipped, {report.failed_count} failed, "
            f"{len(report.failed_buckets)} buckets unreadable"
        )
        return report
