"""Tools for listing, measuring and downloading objects in S3-compatible buckets.

This package wraps a boto3 S3 client with three prefix operations, exposed
both as a library and through the ``bucket-tools`` command line:

    - list: objects and sub-prefixes one level below a prefix
    - usage: total bytes stored below a prefix
    - download: copy every object below a prefix into a local folder

Usage:
    >>> from bucket_tools import S3ClientManager, calculate_usage, load_storage_config
    >>> manager = S3ClientManager(load_storage_config("config.yml"))
    >>> total = calculate_usage(manager, "luxedigest", "reports/")
"""

__version__ = "0.1.0"

from .objectstorage import (
    S3ClientManager,
    calculate_usage,
    download_prefix,
    list_prefix,
)
from .schemas import DownloadSummary, Invocation, Mode, ObjectRecord
from .storage_config import StorageConfig, load_storage_config

__all__ = [
    # Configuration
    "StorageConfig",
    "load_storage_config",
    # Values
    "DownloadSummary",
    "Invocation",
    "Mode",
    "ObjectRecord",
    # Operations
    "S3ClientManager",
    "calculate_usage",
    "download_prefix",
    "list_prefix",
]
