"""Source configuration models for bucket migration.

This module defines the Pydantic models loaded from migration.toml: the list of
Supabase buckets to migrate, the sentinel names that are never copied, and the
folders the inspector probes.
"""

from pathlib import Path
from typing import List, Optional, Union

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mediamover.exceptions import ConfigurationError
from mediamover.security import SecurityError, validate_bucket_name

EMPTY_FOLDER_PLACEHOLDER = ".emptyFolderPlaceholder"

DEFAULT_PROBE_FOLDERS = ["public", "images", "videos", "uploads"]


class SourceBuckets(BaseModel):
    """The `[source]` table of migration.toml.

    Attributes:
        buckets: Supabase bucket names, processed in order
        skip_names: Object names that are never transferred
        probe_folders: Folder prefixes the inspector looks inside

    Example:
        >>> SourceBuckets(buckets=["play-images", "actor-images"])
    """

    buckets: List[str] = []
    skip_names: List[str] = [EMPTY_FOLDER_PLACEHOLDER]
    probe_folders: List[str] = Field(default_factory=lambda: list(DEFAULT_PROBE_FOLDERS))

    @field_validator("buckets")
    @classmethod
    def validate_buckets(cls, v: List[str]) -> List[str]:
        """Reject invalid names and duplicates at config load time."""
        seen = set()
        for name in v:
            try:
                validate_bucket_name(name)
            except SecurityError as e:
                raise ValueError(str(e))
            if name in seen:
                raise ValueError(f"Bucket listed more than once: {name}")
            seen.add(name)
        return v


class SourceConfig(BaseModel):
    """Root configuration loaded from migration.toml."""

    source: SourceBuckets = Field(default_factory=SourceBuckets)

    @classmethod
    def from_toml(cls, path: Union[str, Path]) -> "SourceConfig":
        """Load and validate a migration.toml file.

        Raises:
            ConfigurationError: If the file is not valid TOML or fails validation
        """
        try:
            data = toml.load(path)
        except toml.TomlDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Validation Failed for {path}\n{e}") from e


def resolve_bucket_names(cli_buckets: Optional[List[str]], source_config: SourceConfig) -> List[str]:
    """Pick the bucket list for a run: CLI options first, then migration.toml.

    Args:
        cli_buckets: Names given with --bucket, possibly empty
        source_config: Loaded migration.toml (or an empty default)

    Returns:
        Bucket names to process, in order

    Raises:
        SecurityError: If a CLI bucket name is invalid
    """
    if cli_buckets:
        return [validate_bucket_name(name) for name in cli_buckets]
    return list(source_config.source.buckets)
