"""Application configuration model.

This module defines the runtime configuration for mediamover: credentials and
endpoints for the Supabase Storage source and the Cloudflare R2 destination.
Values are supplied through CLI options, environment variables or a .env file;
nothing secret is ever embedded in the code.
"""
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, field_validator

DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 1000


class SourceSettings(BaseModel):
    """Connection settings for the Supabase Storage source.

    Attributes:
        supabase_url: Project URL (e.g. https://<ref>.supabase.co)
        supabase_service_key: service_role key, needed to read private buckets
    """

    supabase_url: str
    supabase_service_key: SecretStr

    @field_validator("supabase_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"supabase_url must be an http(s) URL: {v}")
        return v.rstrip("/")


class DestinationSettings(BaseModel):
    """Connection settings for the R2 (S3-compatible) destination.

    Attributes:
        endpoint_url: Account endpoint (https://<account>.r2.cloudflarestorage.com)
        access_key_id: R2 access key id
        secret_access_key: R2 secret access key
        bucket_name: Destination bucket every source bucket is copied into
        public_domain: Optional public base URL serving the bucket
        region: Signing region, "auto" for R2
        connect_timeout: Seconds to wait for a connection
        read_timeout: Seconds to wait for a response
    """

    endpoint_url: str
    access_key_id: str
    secret_access_key: SecretStr
    bucket_name: str
    public_domain: Optional[str] = None
    region: str = "auto"
    connect_timeout: float = 10.0
    read_timeout: float = 60.0

    @field_validator("public_domain")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    def public_url(self, object_key: str) -> Optional[str]:
        """Return the public URL for an object key, if a public domain is set."""
        if not self.public_domain:
            return None
        return f"{self.public_domain}/{object_key}"


class AppConfig(BaseModel):
    """Application runtime configuration.

    Either side may be missing: `inspect` only needs the source and
    `presign-upload` only needs the destination. Commands check for the side
    they use and raise a usage error otherwise.

    Attributes:
        source: Supabase Storage settings, if configured
        destination: R2 settings, if configured
        page_size: Number of entries requested per listing page

    Example:
        >>> config = AppConfig(
        ...     source=SourceSettings(
        ...         supabase_url="https://example.supabase.co",
        ...         supabase_service_key="service-key",
        ...     ),
        ...     page_size=100,
        ... )
    """

    source: Optional[SourceSettings] = None
    destination: Optional[DestinationSettings] = None
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
