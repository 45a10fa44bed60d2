"""Security validation utilities for mediamover."""
import logging
import urllib.parse

logger = logging.getLogger(__name__)

# Supabase Storage bucket ids: at most 100 chars, no slash
MAX_BUCKET_NAME_LENGTH = 100

MAX_OBJECT_KEY_LENGTH = 1024


class SecurityError(Exception):
    """Raised when a security validation fails."""

    pass


def validate_object_key(object_key: str, max_length: int = MAX_OBJECT_KEY_LENGTH) -> str:
    """Validate a destination object key with URL decode check.

    Args:
        object_key: Object key to validate
        max_length: Maximum allowed length in bytes (S3 limit is 1024)

    Returns:
        Validated object key

    Raises:
        SecurityError: If the key is empty, too long or contains traversal or
            control characters

    Example:
        >>> validate_object_key("play-images/poster.png")
        'play-images/poster.png'
    """
    if not object_key:
        raise SecurityError("Object key is empty")

    key_length = len(object_key.encode("utf-8"))
    if key_length > max_length:
        raise SecurityError(f"Object key too long: {key_length} > {max_length}")

    # Detect URL-encoded names to prevent ..%2F bypasses
    decoded = urllib.parse.unquote(object_key)
    if decoded != object_key:
        logger.warning(f"Object key URL-encoded: {object_key} -> {decoded}")
        validate_object_key(decoded, max_length)

    if object_key.startswith("/") or ".." in object_key.split("/"):
        raise SecurityError(f"Invalid object key (path traversal): {object_key}")

    if any(ord(c) < 32 for c in object_key):
        raise SecurityError(f"Control characters in object key: {object_key!r}")

    return object_key


def validate_bucket_name(bucket_name: str) -> str:
    """Validate a source bucket name before it is used as a key prefix.

    Follows Supabase Storage naming, not S3 rules: mixed case, short names and
    spaces are all allowed. Only names that would break `{bucket}/{name}`
    are rejected.

    Args:
        bucket_name: Bucket name to validate

    Returns:
        Validated bucket name

    Raises:
        SecurityError: If the name is empty, too long, contains a slash or
            control characters, or is a relative path component

    Example:
        >>> validate_bucket_name("actor-images")
        'actor-images'
    """
    if not bucket_name or not bucket_name.strip():
        raise SecurityError(f"Invalid bucket name: {bucket_name!r} is empty")

    if len(bucket_name) > MAX_BUCKET_NAME_LENGTH:
        raise SecurityError(f"Invalid bucket name: {bucket_name!r} is longer than {MAX_BUCKET_NAME_LENGTH} chars")

    if "/" in bucket_name or bucket_name in (".", ".."):
        raise SecurityError(f"Invalid bucket name: {bucket_name!r}")

    if any(ord(c) < 32 or ord(c) == 127 for c in bucket_name):
        raise SecurityError(f"Invalid bucket name: control characters in {bucket_name!r}")
    return bucket_name
