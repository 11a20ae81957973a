"""Turns command-line flags into an Invocation and runs it."""

from typing import Callable, Optional, Union

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import ValidationError
from bucket_tools.objectstorage import (
    S3ClientManager,
    calculate_usage,
    download_prefix,
    list_prefix,
)
from bucket_tools.schemas import DownloadSummary, Invocation, Mode, ObjectRecord

logger = get_logger(__name__)

DEFAULT_DESTINATION = "/tmp"


def build_invocation(
    bucket: str,
    prefix: str = "",
    destination: str = DEFAULT_DESTINATION,
    list_objects: bool = False,
    usage: bool = False,
    download: bool = False,
) -> Invocation:
    """Validate flags and pick the mode to run.

    When several mode flags are set, list wins over usage, and usage over
    download.

    Raises:
        ValidationError: If a required flag is missing
    """
    if not bucket:
        raise ValidationError("bucket not specified")
    if download and not destination:
        raise ValidationError("destination not specified")
    if (list_objects or usage or download) and not prefix:
        raise ValidationError("prefix not specified")

    mode: Optional[Mode] = None
    if list_objects:
        mode = Mode.LIST
    elif usage:
        mode = Mode.USAGE
    elif download:
        mode = Mode.DOWNLOAD

    return Invocation(
        bucket_name=bucket,
        prefix=prefix,
        destination_path=destination,
        mode=mode,
    )


def run(
    invocation: Invocation,
    manager: S3ClientManager,
    on_record: Optional[Callable[[ObjectRecord], None]] = None,
) -> Union[list[ObjectRecord], int, DownloadSummary, None]:
    """Execute the invocation's mode against the storage client.

    Returns the listed records, the usage total in bytes, the download
    summary, or None when no mode was requested.
    """
    logger.info(
        "Running invocation",
        bucket=invocation.bucket_name,
        prefix=invocation.prefix,
        mode=invocation.mode.value if invocation.mode else None,
    )

    if invocation.mode is Mode.LIST:
        return list_prefix(
            manager, invocation.bucket_name, invocation.prefix, on_record=on_record
        )
    elif invocation.mode is Mode.USAGE:
        return calculate_usage(manager, invocation.bucket_name, invocation.prefix)
    elif invocation.mode is Mode.DOWNLOAD:
        return download_prefix(
            manager,
            invocation.bucket_name,
            invocation.prefix,
            invocation.destination_path,
        )

    return None
