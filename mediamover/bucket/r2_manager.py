"""Cloudflare R2 bucket management.

This module provides the R2Manager class for writing objects into an R2
bucket through its S3-compatible API with boto3: uploading migrated payloads,
listing keys under a prefix, and generating presigned upload URLs.
"""

import time
from typing import Any, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from mediamover.bucket.storage_provider import DestinationStorage
from mediamover.exceptions import StorageOperationError, UploadError
from mediamover.logging_config import get_logger
from mediamover.objects.app_config import DestinationSettings
from mediamover.security import SecurityError, validate_object_key

logger = get_logger(__name__)


class R2Manager(DestinationStorage):
    """Manager for R2 (S3-compatible) bucket operations.

    Attributes:
        s3_client: boto3 S3 client pointed at the R2 endpoint
        settings: Destination settings
        has_error: Flag indicating if initialization encountered errors
    """

    def __init__(self, settings: DestinationSettings, s3_client: Optional[Any] = None) -> None:
        """Initialize the S3 client and verify access to the bucket.

        Args:
            settings: R2 endpoint, credentials and bucket
            s3_client: Pre-built client (mainly for tests)

        Note:
            Sets has_error=True if the bucket cannot be reached with the
            given credentials.
        """
        self.settings = settings
        self.s3_client = s3_client or boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            aws_access_key_id=settings.access_key_id,
            aws_secret_access_key=settings.secret_access_key.get_secret_value(),
            region_name=settings.region,
            config=Config(
                signature_version="s3v4",
                connect_timeout=settings.connect_timeout,
                read_timeout=settings.read_timeout,
            ),
        )
        self._has_error = False
        try:
            self.s3_client.head_bucket(Bucket=settings.bucket_name)
            logger.info(f"Found R2 bucket: {settings.bucket_name}")
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("403", "AccessDenied"):
                logger.error(f"R2 permission denied for bucket {settings.bucket_name}: {e}")
            elif code in ("404", "NoSuchBucket"):
                logger.error(f"R2 bucket not found: {settings.bucket_name}")
            else:
                logger.error(f"Error checking R2 bucket {settings.bucket_name}: {e}")
            self._has_error = True
        except BotoCoreError as e:
            logger.error(f"Error connecting to R2 at {settings.endpoint_url}: {e}", exc_info=True)
            self._has_error = True

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def bucket_name(self) -> str:
        return self.settings.bucket_name

    def put_object(self, key: str, body: bytes, content_type: str) -> None:
        """Upload a payload, overwriting any object with the same key.

        Raises:
            UploadError: If the key is invalid or R2 rejects the write
        """
        try:
            validated_key = validate_object_key(key)
        except SecurityError as e:
            raise UploadError(f"Invalid destination key: {e}", bucket=self.bucket_name, object_name=key) from e

        size_mb = len(body) / (1024 * 1024)
        start_time = time.perf_counter()
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=validated_key,
                Body=body,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            duration = time.perf_counter() - start_time
            logger.error(f"Unable to upload {validated_key} after {duration:.2f}s: {e}")
            raise UploadError(
                f"Unable to upload {validated_key}: {e}", bucket=self.bucket_name, object_name=key
            ) from e

        duration = time.perf_counter() - start_time
        throughput = size_mb / duration if duration > 0 else 0
        logger.info(
            f"Uploaded: {validated_key} [{content_type}] "
            f"({size_mb:.2f} MB in {duration:.2f}s, {throughput:.2f} MB/s)"
        )

    def list_all_keys_with_prefix(self, prefix: str = "") -> List[str]:
        """List every key under a prefix, following continuation tokens.

        Raises:
            StorageOperationError: If the listing fails
        """
        keys: List[str] = []
        try:
            paginator = self.s3_client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket_name, Prefix=prefix):
                keys.extend(item["Key"] for item in page.get("Contents", []))
        except (ClientError, BotoCoreError) as e:
            raise StorageOperationError(f"Unable to list {self.bucket_name}/{prefix}: {e}", bucket=self.bucket_name) from e
        return keys

    def generate_presigned_upload(self, key: str, content_type: str, expires_in: int = 600) -> str:
        """Generate a presigned PUT URL for one object.

        Args:
            key: Destination object key
            content_type: Content type the client must send
            expires_in: URL lifetime in seconds

        Returns:
            Presigned URL

        Raises:
            StorageOperationError: If the key is invalid or signing fails
        """
        try:
            validated_key = validate_object_key(key)
            return self.s3_client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": self.bucket_name,
                    "Key": validated_key,
                    "ContentType": content_type,
                },
                ExpiresIn=expires_in,
            )
        except SecurityError as e:
            raise StorageOperationError(f"Invalid object key: {e}", bucket=self.bucket_name, object_name=key) from e
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Unable to presign upload for {key}: {e}")
            raise StorageOperationError(
                f"Unable to presign upload for {key}: {e}", bucket=self.bucket_name, object_name=key
            ) from e
