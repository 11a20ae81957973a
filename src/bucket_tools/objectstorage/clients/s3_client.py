"""S3 client management for S3-compatible object storage.

This module wraps a boto3 S3 client behind the two capabilities the rest of
bucket-tools needs:

    1. A lazy listing of the objects under a prefix, either one level deep
       or recursively, yielding ObjectRecord values
    2. Fetching a single object into a local file

Listing is exposed as a generator over the ``list_objects_v2`` paginator, so
pages are requested only as records are consumed. Closing the generator
(for example with ``contextlib.closing``) stops any further page requests.
Listing failures are not raised from the generator; they are yielded as a
final record carrying the error so that the consumer decides whether to
abort.

S3-Compatible Services:
    The endpoint is taken from StorageConfig, so Linode Object Storage,
    MinIO, DigitalOcean Spaces and AWS itself are all reached the same way.
"""

import os
from typing import Iterator

import boto3
from boto3.exceptions import Boto3Error
from botocore.exceptions import BotoCoreError, ClientError

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import ConfigurationError, DownloadError
from bucket_tools.schemas import ObjectRecord
from bucket_tools.storage_config import StorageConfig

logger = get_logger(__name__)


class S3ClientManager:
    """Manages an S3 client connection and the operations built on it."""

    def __init__(self, config: StorageConfig, delimiter: str = "/"):
        """Initialize S3 client manager.

        Args:
            config: Storage connection settings
            delimiter: Key delimiter used for non-recursive listings
        """
        self.config = config
        self.delimiter = delimiter
        self._client = None
        logger.info("S3 client manager initialized", endpoint=config.endpoint_url)

    @property
    def client(self):
        """Get or create S3 client instance."""
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self):
        """Create boto3 S3 client with the configured settings.

        Raises:
            ConfigurationError: If boto3 rejects the settings
        """
        kwargs = {
            "region_name": self.config.region_name,
            "endpoint_url": self.config.endpoint_url,
            "use_ssl": self.config.use_ssl,
        }

        if self.config.access_key and self.config.secret_key:
            kwargs.update(
                {
                    "aws_access_key_id": self.config.access_key,
                    "aws_secret_access_key": self.config.secret_key,
                }
            )
            logger.info("S3 client created with explicit credentials")
        else:
            logger.info("S3 client created with default credential chain")

        try:
            return boto3.client("s3", **kwargs)  # type: ignore
        except (BotoCoreError, ValueError) as e:
            error_msg = f"Failed to create S3 client for '{self.config.endpoint_url}': {e}"
            logger.error(error_msg, error=str(e))
            raise ConfigurationError(error_msg)

    def list_objects(
        self, bucket: str, prefix: str, recursive: bool = False
    ) -> Iterator[ObjectRecord]:
        """Lazily list objects under a prefix.

        A non-recursive listing groups deeper keys into common prefixes,
        which are yielded as zero-size records whose key ends with the
        delimiter. Within each page, objects and common prefixes are
        yielded together in key order.

        Args:
            bucket: Bucket name
            prefix: Key prefix to list under
            recursive: Descend through nested prefixes

        Yields:
            ObjectRecord per object; on failure, one last record with error set
        """
        kwargs = {"Bucket": bucket, "Prefix": prefix}
        if not recursive:
            kwargs["Delimiter"] = self.delimiter

        logger.debug(
            "Listing objects", bucket=bucket, prefix=prefix, recursive=recursive
        )

        try:
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(**kwargs):
                records = [
                    ObjectRecord(key=obj["Key"], size=obj.get("Size", 0))
                    for obj in page.get("Contents", [])
                ]
                records.extend(
                    ObjectRecord(key=common_prefix["Prefix"])
                    for common_prefix in page.get("CommonPrefixes", [])
                )
                # Objects and prefixes interleaved in key order
                records.sort(key=lambda record: record.key)
                yield from records
        except (BotoCoreError, ClientError) as e:
            logger.error(
                "Object listing failed", bucket=bucket, prefix=prefix, error=str(e)
            )
            yield ObjectRecord(key=prefix, error=e)

    def fget_object(self, bucket: str, key: str, path: str) -> None:
        """Download an object into a local file, creating parent folders.

        Raises:
            DownloadError: If the object cannot be fetched or written
        """
        try:
            parent = os.path.dirname(path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self.client.download_file(bucket, key, path)
        except (Boto3Error, BotoCoreError, ClientError, OSError) as e:
            raise DownloadError(key, str(e))

        logger.debug("Object downloaded", bucket=bucket, key=key, path=path)
