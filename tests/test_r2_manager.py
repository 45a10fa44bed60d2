"""Tests for the R2 destination manager."""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from mediamover.bucket.r2_manager import R2Manager
from mediamover.exceptions import StorageOperationError, UploadError
from mediamover.objects.app_config import DestinationSettings


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "error"}}, operation)


@pytest.fixture
def mock_s3() -> MagicMock:
    return MagicMock()


@pytest.fixture
def manager(destination_settings: DestinationSettings, mock_s3: MagicMock) -> R2Manager:
    return R2Manager(destination_settings, s3_client=mock_s3)


@pytest.mark.unit
class TestConnection:
    def test_connects(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        mock_s3.head_bucket.assert_called_once_with(Bucket="media-bucket")
        assert manager.has_error is False
        assert manager.bucket_name == "media-bucket"

    @pytest.mark.parametrize("code", ["403", "404", "500"])
    def test_client_errors_set_error(self, destination_settings: DestinationSettings, code: str) -> None:
        s3 = MagicMock()
        s3.head_bucket.side_effect = client_error(code, "HeadBucket")

        assert R2Manager(destination_settings, s3_client=s3).has_error is True

    def test_unreachable_endpoint_sets_error(self, destination_settings: DestinationSettings) -> None:
        s3 = MagicMock()
        s3.head_bucket.side_effect = EndpointConnectionError(endpoint_url=destination_settings.endpoint_url)

        assert R2Manager(destination_settings, s3_client=s3).has_error is True


@pytest.mark.unit
class TestPutObject:
    def test_put(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        manager.put_object("play-images/hamlet.png", b"png-bytes", "image/png")

        mock_s3.put_object.assert_called_once_with(
            Bucket="media-bucket",
            Key="play-images/hamlet.png",
            Body=b"png-bytes",
            ContentType="image/png",
        )

    def test_rejected_write_raises(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        mock_s3.put_object.side_effect = client_error("AccessDenied", "PutObject")

        with pytest.raises(UploadError) as exc_info:
            manager.put_object("play-images/hamlet.png", b"png-bytes", "image/png")

        assert exc_info.value.object_name == "play-images/hamlet.png"
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_invalid_key_never_reaches_r2(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        with pytest.raises(UploadError):
            manager.put_object("../outside.png", b"data", "image/png")

        mock_s3.put_object.assert_not_called()


@pytest.mark.unit
class TestListKeys:
    def test_follows_pages(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        mock_s3.get_paginator.return_value.paginate.return_value = [
            {"Contents": [{"Key": "play-images/a.png"}, {"Key": "play-images/b.png"}]},
            {"Contents": [{"Key": "play-images/c.png"}]},
            {},
        ]

        keys = manager.list_all_keys_with_prefix("play-images/")

        mock_s3.get_paginator.assert_called_once_with("list_objects_v2")
        mock_s3.get_paginator.return_value.paginate.assert_called_once_with(
            Bucket="media-bucket", Prefix="play-images/"
        )
        assert keys == ["play-images/a.png", "play-images/b.png", "play-images/c.png"]

    def test_listing_failure_raises(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        mock_s3.get_paginator.return_value.paginate.side_effect = client_error("NoSuchBucket", "ListObjectsV2")

        with pytest.raises(StorageOperationError):
            manager.list_all_keys_with_prefix("play-images/")


@pytest.mark.unit
class TestPresignedUpload:
    def test_presign(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        mock_s3.generate_presigned_url.return_value = "https://signed.example/upload"

        url = manager.generate_presigned_upload("1700000000000-poster.png", "image/png", expires_in=600)

        assert url == "https://signed.example/upload"
        mock_s3.generate_presigned_url.assert_called_once_with(
            "put_object",
            Params={"Bucket": "media-bucket", "Key": "1700000000000-poster.png", "ContentType": "image/png"},
            ExpiresIn=600,
        )

    def test_invalid_key(self, manager: R2Manager, mock_s3: MagicMock) -> None:
        with pytest.raises(StorageOperationError):
            manager.generate_presigned_upload("/absolute.png", "image/png")

        mock_s3.generate_presigned_url.assert_not_called()
