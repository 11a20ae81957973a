"""Prefix operations: listing, usage totals and downloads.

Each operation walks the lazy listing produced by S3ClientManager and closes
it on return, so that an early abort stops further page requests.
"""

from contextlib import closing
from typing import Callable, Optional

from bucket_tools.core import get_logger, get_tracer
from bucket_tools.core.exceptions import DownloadError, ListingError
from bucket_tools.core.formatting import format_bytes
from bucket_tools.objectstorage.clients import S3ClientManager
from bucket_tools.objectstorage.paths import (
    file_exists,
    is_within,
    normalize_prefix,
    object_to_file_name,
)
from bucket_tools.schemas import DownloadSummary, ObjectRecord

logger = get_logger(__name__)
tracer = get_tracer(__name__)


def _raise_for_record(record: ObjectRecord, bucket: str, prefix: str) -> None:
    if record.error is not None:
        error_msg = f"Failed to list objects in '{bucket}' under '{prefix}': {record.error}"
        logger.error(error_msg, error=str(record.error))
        raise ListingError(error_msg)


def list_prefix(
    manager: S3ClientManager,
    bucket: str,
    prefix: str,
    on_record: Optional[Callable[[ObjectRecord], None]] = None,
) -> list[ObjectRecord]:
    """List objects and sub-prefixes one level under a prefix.

    Args:
        manager: Storage client
        bucket: Bucket name
        prefix: Prefix to list; a trailing "/" is added when missing
        on_record: Called with each record as soon as it arrives

    Returns:
        Records in listing order

    Raises:
        ValidationError: If the prefix is empty
        ListingError: If the listing fails part way through
    """
    prefix = normalize_prefix(prefix, manager.delimiter)
    logger.info("Listing prefix", bucket=bucket, prefix=prefix)

    records = []
    with tracer.start_as_current_span("list_prefix") as span:
        span.set_attribute("bucket", bucket)
        span.set_attribute("prefix", prefix)

        with closing(manager.list_objects(bucket, prefix, recursive=False)) as objects:
            for record in objects:
                _raise_for_record(record, bucket, prefix)
                logger.info(
                    "Object listed", key=record.key, size=format_bytes(record.size)
                )
                if on_record is not None:
                    on_record(record)
                records.append(record)

    return records


def calculate_usage(manager: S3ClientManager, bucket: str, prefix: str) -> int:
    """Total size in bytes of every object below a prefix.

    Raises:
        ValidationError: If the prefix is empty
        ListingError: If the listing fails part way through
    """
    prefix = normalize_prefix(prefix, manager.delimiter)
    logger.info("Getting usage", bucket=bucket, prefix=prefix)

    total = 0
    object_count = 0
    with tracer.start_as_current_span("calculate_usage") as span:
        span.set_attribute("bucket", bucket)
        span.set_attribute("prefix", prefix)

        with closing(manager.list_objects(bucket, prefix, recursive=True)) as objects:
            for record in objects:
                _raise_for_record(record, bucket, prefix)
                total += record.size
                object_count += 1

        span.set_attribute("total_bytes", total)

    logger.info(
        "Usage calculated",
        bucket=bucket,
        prefix=prefix,
        object_count=object_count,
        total_bytes=total,
    )
    return total


def download_prefix(
    manager: S3ClientManager, bucket: str, prefix: str, destination: str
) -> DownloadSummary:
    """Download every object below a prefix into a local folder.

    The prefix is stripped from each key to build the local path, so
    ``reports/2020/a.csv`` under ``reports/`` lands at
    ``<destination>/2020/a.csv``. Zero-size directory markers and files that
    already exist locally are skipped. A failed download is logged and the
    remaining objects are still fetched; a listing failure aborts.

    Args:
        manager: Storage client
        bucket: Bucket name
        prefix: Prefix to download; a trailing "/" is added when missing
        destination: Local folder to write into

    Returns:
        DownloadSummary with per-outcome counts

    Raises:
        ValidationError: If the prefix is empty
        ListingError: If the listing fails part way through
    """
    prefix = normalize_prefix(prefix, manager.delimiter)
    logger.info(
        "Downloading prefix", bucket=bucket, prefix=prefix, destination=destination
    )

    summary = DownloadSummary()
    with tracer.start_as_current_span("download_prefix") as span:
        span.set_attribute("bucket", bucket)
        span.set_attribute("prefix", prefix)

        with closing(manager.list_objects(bucket, prefix, recursive=True)) as objects:
            for record in objects:
                _raise_for_record(record, bucket, prefix)
                logger.info(
                    "Object listed", key=record.key, size=format_bytes(record.size)
                )

                if record.size == 0:
                    summary.skipped_markers += 1
                    continue

                path = object_to_file_name(record.key, prefix, destination)
                if not is_within(path, destination):
                    logger.warning(
                        "Skipping key outside destination", key=record.key, path=path
                    )
                    summary.failed += 1
                    continue

                if file_exists(path):
                    logger.info("File exists", path=path)
                    summary.skipped_existing += 1
                    continue

                try:
                    manager.fget_object(bucket, record.key, path)
                except DownloadError as e:
                    logger.error("Download failed", key=e.key, error=str(e))
                    summary.failed += 1
                    continue

                summary.downloaded += 1

        span.set_attribute("downloaded", summary.downloaded)
        span.set_attribute("failed", summary.failed)

    logger.info(
        "Download complete",
        bucket=bucket,
        prefix=prefix,
        downloaded=summary.downloaded,
        skipped_existing=summary.skipped_existing,
        skipped_markers=summary.skipped_markers,
        failed=summary.failed,
    )
    return summary
