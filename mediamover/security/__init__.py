"""Security utilities for mediamover."""

from mediamover.security.validators import (
    MAX_BUCKET_NAME_LENGTH,
    MAX_OBJECT_KEY_LENGTH,
    SecurityError,
    validate_bucket_name,
    validate_object_key,
)

__all__ = [
    "SecurityError",
    "validate_object_key",
    "validate_bucket_name",
    "MAX_OBJECT_KEY_LENGTH",
    "MAX_BUCKET_NAME_LENGTH",
]
