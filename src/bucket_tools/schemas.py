"""Value types shared by the storage client, operations and CLI."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class ObjectRecord:
    """A single entry produced by an object listing.

    Attributes:
        key: Object key (or common prefix, ending in "/")
        size: Object size in bytes, 0 for prefixes and directory markers
        error: Error raised while listing, if any
    """

    key: str
    size: int = 0
    error: Optional[Exception] = None


class Mode(str, Enum):
    """Operation selected on the command line."""

    LIST = "list"
    USAGE = "usage"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class Invocation:
    """What to run, derived from command-line flags."""

    bucket_name: str
    prefix: str
    destination_path: str
    mode: Optional[Mode]


@dataclass
class DownloadSummary:
    """Counts reported by a prefix download."""

    downloaded: int = 0
    skipped_existing: int = 0
    skipped_markers: int = 0
    failed: int = 0
