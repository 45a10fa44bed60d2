"""Custom exceptions for the mediamover application."""


class MediaMoverError(Exception):
    """Base exception class for mediamover-specific errors."""

    pass


class ConfigurationError(MediaMoverError):
    """Raised when there are configuration-related errors."""

    pass


class StorageOperationError(MediaMoverError):
    """Raised when a storage operation fails.

    Attributes:
        bucket: Bucket the operation targeted
        object_name: Object name, if the operation was for a single object
    """

    def __init__(self, message: str, bucket: str = "", object_name: str = "") -> None:
        super().__init__(message)
        self.bucket = bucket
        self.object_name = object_name


class ListingError(StorageOperationError):
    """Raised when the objects in a bucket cannot be listed."""

    pass


class DownloadError(StorageOperationError):
    """Raised when an object payload cannot be downloaded."""

    pass


class UploadError(StorageOperationError):
    """Raised when an object cannot be written to the destination."""

    pass
