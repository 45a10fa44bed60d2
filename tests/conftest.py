"""Pytest fixtures and configuration."""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from mediamover.objects.app_config import AppConfig, DestinationSettings, SourceSettings
from mediamover.objects.source_config import SourceConfig
from tests.fake_storage import FakeDestination, FakeSource, file_entry, folder_entry


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line("markers", "security: input validation tests")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def source_settings() -> SourceSettings:
    return SourceSettings(
        supabase_url="https://example-ref.supabase.co",
        supabase_service_key="test-service-key",
    )


@pytest.fixture
def destination_settings() -> DestinationSettings:
    return DestinationSettings(
        endpoint_url="https://account.r2.cloudflarestorage.com",
        access_key_id="test-access-key",
        secret_access_key="test-secret-key",
        bucket_name="media-bucket",
        public_domain="https://media.example.com/",
    )


@pytest.fixture
def app_config(source_settings: SourceSettings, destination_settings: DestinationSettings) -> AppConfig:
    return AppConfig(source=source_settings, destination=destination_settings, page_size=100)


@pytest.fixture
def source_config() -> SourceConfig:
    return SourceConfig(**{"source": {"buckets": ["play-images", "actor-images"]}})


@pytest.fixture
def fake_source() -> FakeSource:
    """Two buckets; play-images holds a folder placeholder and an empty-folder sentinel."""
    return FakeSource(
        {
            "play-images": [
                file_entry("hamlet.png"),
                folder_entry("archive"),
                file_entry(".emptyFolderPlaceholder"),
                file_entry("program.pdf"),
            ],
            "actor-images": [
                file_entry("ana.jpg"),
                file_entry("luis.webp"),
            ],
        }
    )


@pytest.fixture
def fake_destination() -> FakeDestination:
    return FakeDestination()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up mock environment variables."""
    monkeypatch.setenv("SUPABASE_URL", "https://example-ref.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "test-service-key")
    monkeypatch.setenv("R2_ENDPOINT", "https://account.r2.cloudflarestorage.com")
    monkeypatch.setenv("R2_ACCESS_KEY_ID", "test-access-key")
    monkeypatch.setenv("R2_SECRET_ACCESS_KEY", "test-secret-key")
    monkeypatch.setenv("R2_BUCKET_NAME", "media-bucket")
