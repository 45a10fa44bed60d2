"""Tests for the runtime configuration models."""

import pytest
from pydantic import ValidationError

from mediamover.objects.app_config import AppConfig, DestinationSettings, SourceSettings


@pytest.mark.unit
class TestSourceSettings:
    def test_secret_is_hidden(self, source_settings: SourceSettings) -> None:
        assert "test-service-key" not in repr(source_settings)
        assert source_settings.supabase_service_key.get_secret_value() == "test-service-key"

    def test_trailing_slash_stripped(self) -> None:
        settings = SourceSettings(supabase_url="https://ref.supabase.co/", supabase_service_key="k")
        assert settings.supabase_url == "https://ref.supabase.co"

    def test_url_must_be_http(self) -> None:
        with pytest.raises(ValidationError):
            SourceSettings(supabase_url="ref.supabase.co", supabase_service_key="k")


@pytest.mark.unit
class TestDestinationSettings:
    def test_defaults(self, destination_settings: DestinationSettings) -> None:
        assert destination_settings.region == "auto"
        assert destination_settings.connect_timeout == 10.0
        assert "test-secret-key" not in repr(destination_settings)

    def test_public_url(self, destination_settings: DestinationSettings) -> None:
        assert destination_settings.public_url("play-images/hamlet.png") == (
            "https://media.example.com/play-images/hamlet.png"
        )

    def test_public_url_without_domain(self, destination_settings: DestinationSettings) -> None:
        settings = destination_settings.model_copy(update={"public_domain": None})
        assert settings.public_url("play-images/hamlet.png") is None


@pytest.mark.unit
class TestAppConfig:
    def test_sides_are_optional(self) -> None:
        config = AppConfig()
        assert config.source is None
        assert config.destination is None
        assert config.page_size == 100

    @pytest.mark.parametrize("page_size", [0, 1001])
    def test_page_size_bounds(self, page_size: int) -> None:
        with pytest.raises(ValidationError):
            AppConfig(page_size=page_size)
