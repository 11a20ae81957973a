"""Test configuration and fixtures for bucket-tools."""

import os

import boto3
import pytest
from moto import mock_aws

from bucket_tools.core.exceptions import DownloadError
from bucket_tools.objectstorage import S3ClientManager
from bucket_tools.storage_config import StorageConfig

BUCKET = "luxedigest"


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials, and no config overrides leaking in from the shell."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for name in ("ENDPOINT", "ACCESS_KEY", "SECRET_KEY", "USE_SSL", "REGION_NAME"):
        monkeypatch.delenv(f"BUCKET_TOOLS_{name}", raising=False)


@pytest.fixture
def storage_config(aws_credentials):
    """Storage config pointing at the endpoint moto intercepts."""
    return StorageConfig(
        endpoint="https://s3.amazonaws.com",
        access_key="test_key",
        secret_key="test_secret",
    )


@pytest.fixture
def s3(aws_credentials):
    """Mocked S3 with an empty bucket."""
    with mock_aws():
        client = boto3.client(
            "s3",
            aws_access_key_id="test_key",
            aws_secret_access_key="test_secret",
            region_name="us-east-1",
        )
        client.create_bucket(Bucket=BUCKET)
        yield client


@pytest.fixture
def reports_bucket(s3):
    """Bucket holding two reports and a zero-size directory marker."""
    s3.put_object(Bucket=BUCKET, Key="reports/2020/a.csv", Body=b"a" * 100)
    s3.put_object(Bucket=BUCKET, Key="reports/2020/", Body=b"")
    s3.put_object(Bucket=BUCKET, Key="reports/2021/b.csv", Body=b"b" * 50)
    s3.put_object(Bucket=BUCKET, Key="reports-old/c.csv", Body=b"c" * 7)
    return s3


@pytest.fixture
def manager(s3, storage_config):
    """S3 client manager talking to the mocked bucket."""
    return S3ClientManager(storage_config)


class FakeManager:
    """In-memory stand-in for S3ClientManager.

    Records how far each listing was consumed and whether it was closed.
    """

    delimiter = "/"

    def __init__(self, records, failing_keys=()):
        self.records = list(records)
        self.failing_keys = set(failing_keys)
        self.listings = []
        self.yielded = 0
        self.closed = False
        self.fetched = []

    def list_objects(self, bucket, prefix, recursive=False):
        self.listings.append((bucket, prefix, recursive))
        try:
            for record in self.records:
                self.yielded += 1
                yield record
        finally:
            self.closed = True

    def fget_object(self, bucket, key, path):
        self.fetched.append(key)
        if key in self.failing_keys:
            raise DownloadError(key, "connection reset")
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as handle:
            handle.write(b"x")


@pytest.fixture
def fake_manager():
    """FakeManager class, for tests that inject listing or fetch errors."""
    return FakeManager
