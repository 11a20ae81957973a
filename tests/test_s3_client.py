"""Tests for the S3 client manager with mocked S3."""

from contextlib import closing
from unittest.mock import patch

import pytest
from boto3.exceptions import RetriesExceededError, S3TransferFailedError
from botocore.exceptions import ReadTimeoutError

from bucket_tools.core.exceptions import ConfigurationError, DownloadError
from bucket_tools.objectstorage import S3ClientManager
from bucket_tools.storage_config import StorageConfig

BUCKET = "luxedigest"


class TestClientCreation:
    """Test boto3 client construction."""

    def test_endpoint_from_config(self, storage_config):
        """Test client targets the configured endpoint."""
        manager = S3ClientManager(storage_config)

        assert manager.client.meta.endpoint_url == "https://s3.amazonaws.com"
        assert manager.client.meta.region_name == "us-east-1"

    def test_client_is_cached(self, storage_config):
        """Test the same client instance is reused."""
        manager = S3ClientManager(storage_config)

        assert manager.client is manager.client

    def test_invalid_endpoint(self, aws_credentials):
        """Test an unusable endpoint raises ConfigurationError."""
        manager = S3ClientManager(StorageConfig(endpoint="://"))

        with pytest.raises(ConfigurationError, match="Failed to create S3 client"):
            manager.client


class TestListObjects:
    """Test lazy object listings."""

    def test_non_recursive_yields_common_prefixes(self, reports_bucket, manager):
        """Test deeper keys are grouped into zero-size prefix records."""
        records = list(manager.list_objects(BUCKET, "reports/", recursive=False))

        assert [r.key for r in records] == ["reports/2020/", "reports/2021/"]
        assert all(r.size == 0 and r.error is None for r in records)

    def test_recursive_yields_every_object(self, reports_bucket, manager):
        """Test recursive listing returns all keys with their sizes."""
        records = list(manager.list_objects(BUCKET, "reports/", recursive=True))

        assert {r.key: r.size for r in records} == {
            "reports/2020/": 0,
            "reports/2020/a.csv": 100,
            "reports/2021/b.csv": 50,
        }

    def test_pagination(self, s3, manager):
        """Test listings span multiple pages."""
        for i in range(1005):
            s3.put_object(Bucket=BUCKET, Key=f"many/{i:04d}.txt", Body=b"1")

        records = list(manager.list_objects(BUCKET, "many/", recursive=True))

        assert len(records) == 1005

    def test_missing_bucket_yields_error_record(self, s3, manager):
        """Test listing failures arrive as a final record carrying the error."""
        records = list(manager.list_objects("no-such-bucket", "reports/", True))

        assert len(records) == 1
        assert records[0].error is not None
        assert "NoSuchBucket" in str(records[0].error)

    def test_objects_and_prefixes_in_key_order(self, s3, manager):
        """Test objects and sub-prefixes are interleaved by key."""
        s3.put_object(Bucket=BUCKET, Key="mixed/a/deep.txt", Body=b"1")
        s3.put_object(Bucket=BUCKET, Key="mixed/b.txt", Body=b"22")
        s3.put_object(Bucket=BUCKET, Key="mixed/c/deep.txt", Body=b"3")

        records = list(manager.list_objects(BUCKET, "mixed/", recursive=False))

        assert [r.key for r in records] == ["mixed/a/", "mixed/b.txt", "mixed/c/"]
        assert [r.size for r in records] == [0, 2, 0]

    def test_close_stops_listing(self, reports_bucket, manager):
        """Test a closed listing yields nothing further."""
        with closing(manager.list_objects(BUCKET, "reports/", True)) as objects:
            first = next(objects)

        assert first.key == "reports/2020/"
        assert list(objects) == []


class TestFgetObject:
    """Test downloading single objects."""

    def test_creates_parent_folders(self, reports_bucket, manager, tmp_path):
        """Test object bytes land at the path, parents created."""
        target = tmp_path / "nested" / "deeper" / "a.csv"

        manager.fget_object(BUCKET, "reports/2020/a.csv", str(target))

        assert target.read_bytes() == b"a" * 100

    def test_missing_key(self, s3, manager, tmp_path):
        """Test a missing object raises DownloadError naming the key."""
        with pytest.raises(DownloadError) as exc_info:
            manager.fget_object(BUCKET, "reports/missing.csv", str(tmp_path / "m"))

        assert exc_info.value.key == "reports/missing.csv"

    def test_retries_exceeded(self, reports_bucket, manager, tmp_path):
        """Test a transfer that gives up after retries raises DownloadError."""
        timeout = RetriesExceededError(
            ReadTimeoutError(endpoint_url="https://s3.amazonaws.com")
        )

        with patch.object(manager.client, "download_file", side_effect=timeout):
            with pytest.raises(DownloadError, match="Max Retries Exceeded") as exc_info:
                manager.fget_object(BUCKET, "reports/2020/a.csv", str(tmp_path / "a"))

        assert exc_info.value.key == "reports/2020/a.csv"

    def test_transfer_failed(self, reports_bucket, manager, tmp_path):
        """Test a failed transfer raises DownloadError."""
        failure = S3TransferFailedError("Failed to download")

        with patch.object(manager.client, "download_file", side_effect=failure):
            with pytest.raises(DownloadError, match="Failed to download"):
                manager.fget_object(BUCKET, "reports/2020/a.csv", str(tmp_path / "a"))
