"""Object storage operations for S3-compatible services."""

from .clients import S3ClientManager
from .operations import calculate_usage, download_prefix, list_prefix
from .paths import file_exists, normalize_prefix, object_to_file_name

__all__ = [
    "S3ClientManager",
    "calculate_usage",
    "download_prefix",
    "list_prefix",
    "file_exists",
    "normalize_prefix",
    "object_to_file_name",
]
