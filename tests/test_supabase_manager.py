"""Tests for the Supabase Storage source manager."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from mediamover.bucket.supabase_manager import SupabaseStorageManager
from mediamover.exceptions import DownloadError, ListingError
from mediamover.objects.app_config import SourceSettings


def make_row(name: str, with_id: bool = True) -> dict:
    return {
        "name": name,
        "id": f"uuid-{name}" if with_id else None,
        "metadata": {"size": 1024, "mimetype": "image/png"} if with_id else None,
    }


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.storage.list_buckets.return_value = [{"name": "play-images"}, {"name": "actor-images"}]
    return client


@pytest.fixture
def manager(source_settings: SourceSettings, mock_client: MagicMock) -> SupabaseStorageManager:
    return SupabaseStorageManager(source_settings, client=mock_client)


@pytest.mark.unit
class TestConnection:
    def test_connects(self, manager: SupabaseStorageManager) -> None:
        assert manager.has_error is False
        assert manager.list_buckets() == ["play-images", "actor-images"]

    def test_bucket_records_as_objects(self, source_settings: SourceSettings) -> None:
        client = MagicMock()
        client.storage.list_buckets.return_value = [SimpleNamespace(name="blog-images", public=False)]

        manager = SupabaseStorageManager(source_settings, client=client)

        assert manager.list_buckets() == ["blog-images"]

    def test_connection_failure_sets_error(self, source_settings: SourceSettings) -> None:
        client = MagicMock()
        client.storage.list_buckets.side_effect = RuntimeError("Invalid API key")

        manager = SupabaseStorageManager(source_settings, client=client)

        assert manager.has_error is True


@pytest.mark.unit
class TestListObjects:
    def test_single_page(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        mock_client.storage.from_.return_value.list.return_value = [
            make_row("hamlet.png"),
            make_row("archive", with_id=False),
        ]

        entries = manager.list_objects("play-images", limit=100, offset=0)

        mock_client.storage.from_.assert_called_with("play-images")
        mock_client.storage.from_.return_value.list.assert_called_once_with(
            "",
            {"limit": 100, "offset": 0, "sortBy": {"column": "name", "order": "asc"}},
        )
        assert [entry.name for entry in entries] == ["hamlet.png", "archive"]
        assert entries[0].is_file and entries[0].size == 1024
        assert not entries[1].is_file

    def test_list_all_follows_offsets(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        bucket_api = mock_client.storage.from_.return_value
        bucket_api.list.side_effect = [
            [make_row("a.png"), make_row("b.png")],
            [make_row("c.png"), make_row("d.png")],
            [make_row("e.png")],
        ]

        entries = manager.list_all_objects("gallery-images", page_size=2)

        assert [entry.name for entry in entries] == ["a.png", "b.png", "c.png", "d.png", "e.png"]
        offsets = [call.args[1]["offset"] for call in bucket_api.list.call_args_list]
        assert offsets == [0, 2, 4]

    def test_none_response_is_empty(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        mock_client.storage.from_.return_value.list.return_value = None

        assert manager.list_objects("play-images") == []

    def test_listing_failure_raises(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        original = RuntimeError("Bucket not found")
        mock_client.storage.from_.return_value.list.side_effect = original

        with pytest.raises(ListingError) as exc_info:
            manager.list_objects("missing-bucket")

        assert exc_info.value.bucket == "missing-bucket"
        assert exc_info.value.__cause__ is original


@pytest.mark.unit
class TestDownloadObject:
    def test_download(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        mock_client.storage.from_.return_value.download.return_value = b"image-bytes"

        assert manager.download_object("play-images", "hamlet.png") == b"image-bytes"
        mock_client.storage.from_.return_value.download.assert_called_once_with("hamlet.png")

    def test_download_failure_raises(self, manager: SupabaseStorageManager, mock_client: MagicMock) -> None:
        mock_client.storage.from_.return_value.download.side_effect = RuntimeError("Object not found")

        with pytest.raises(DownloadError) as exc_info:
            manager.download_object("play-images", "gone.png")

        assert exc_info.value.object_name == "gone.png"
        assert "Object not found" in str(exc_info.value)
