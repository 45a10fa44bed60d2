"""Storage listing entries and migration outcome records.

This module defines the StorageObject model for one entry returned by a
bucket listing, and the dataclasses that record what happened to each object
during a migration run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class StorageObject(BaseModel):
    """One entry from a bucket listing.

    Supabase returns folder placeholders alongside files; folders come back
    without an `id`.

    Attributes:
        name: Object name, unique within its bucket
        id: Backend identifier, None for folder placeholders
        metadata: Backend metadata (size, mimetype, ...) if reported

    Example:
        >>> StorageObject(name="poster.png", id="2d1f...", metadata={"size": 2048})
    """

    name: str
    id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def is_file(self) -> bool:
        return self.id is not None

    @property
    def size(self) -> Optional[int]:
        if self.metadata and self.metadata.get("size") is not None:
            return int(self.metadata["size"])
        return None

    @property
    def mimetype(self) -> Optional[str]:
        if self.metadata:
            return self.metadata.get("mimetype")
        return None


class TransferStatus(str, Enum):
    UPLOADED = "uploaded"
    SKIPPED = "skipped"
    DOWNLOAD_FAILED = "download_failed"
    UPLOAD_FAILED = "upload_failed"


@dataclass
class TransferOutcome:
    """Result of migrating a single object."""

    source_bucket: str
    object_name: str
    destination_key: str
    status: TransferStatus
    content_type: Optional[str] = None
    size_bytes: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def is_failure(self) -> bool:
        return self.status in (TransferStatus.DOWNLOAD_FAILED, TransferStatus.UPLOAD_FAILED)


@dataclass
class BucketReport:
    """Outcomes for one source bucket."""

    bucket: str
    listed_count: int = 0
    listing_error: Optional[str] = None
    outcomes: List[TransferOutcome] = field(default_factory=list)

    def count(self, status: TransferStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)

    @property
    def uploaded_count(self) -> int:
        return self.count(TransferStatus.UPLOADED)

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_failure)

    @property
    def has_failures(self) -> bool:
        return self.listing_error is not None or self.failed_count > 0


@dataclass
class MigrationReport:
    """Outcomes for a whole run, one BucketReport per source bucket in order."""

    buckets: List[BucketReport] = field(default_factory=list)

    @property
    def listed_count(self) -> int:
        return sum(report.listed_count for report in self.buckets)

    @property
    def uploaded_count(self) -> int:
        return sum(report.uploaded_count for report in self.buckets)

    @property
    def skipped_count(self) -> int:
        return sum(report.count(TransferStatus.SKIPPED) for report in self.buckets)

    @property
    def failed_count(self) -> int:
        return sum(report.failed_count for report in self.buckets)

    @property
    def failed_buckets(self) -> List[str]:
        """Buckets that could not be listed at all."""
        return [report.bucket for report in self.buckets if report.listing_error is not None]

    @property
    def has_failures(self) -> bool:
        return any(report.has_failures for report in self.buckets)

    def failures(self) -> List[TransferOutcome]:
        return [outcome for report in self.buckets for outcome in report.outcomes if outcome.is_failure]
