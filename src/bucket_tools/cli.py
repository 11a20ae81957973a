"""Command-line interface for bucket-tools.

List, measure or download the objects under a prefix of an S3-compatible
bucket:

    bucket-tools --bucket luxedigest --prefix reports/ --list
    bucket-tools --bucket luxedigest --prefix reports/ --usage
    bucket-tools --bucket luxedigest --prefix reports/ --download --destination ./out

Connection settings are read from config.yml (see storage_config).
"""

from typing import Annotated, Optional

import typer

from . import __version__
from .cli_params import (
    bucket_option,
    config_option,
    destination_option,
    download_option,
    list_option,
    prefix_option,
    quiet_option,
    usage_option,
)
from .core import get_logger
from .core.observability import setup_logging
from .core.formatting import format_bytes
from .dispatcher import DEFAULT_DESTINATION, build_invocation, run
from .objectstorage import S3ClientManager
from .schemas import Mode, ObjectRecord
from .storage_config import DEFAULT_CONFIG_PATH, load_storage_config

logger = get_logger(__name__)

app = typer.Typer(
    name="bucket-tools",
    help="List, measure and download objects in an S3-compatible bucket.",
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"bucket-tools {__version__}")
        raise typer.Exit()


def _echo_record(record: ObjectRecord) -> None:
    typer.echo(f"{record.key} - {format_bytes(record.size)}")


@app.command()
def main(
    bucket: Annotated[str, bucket_option()] = "",
    prefix: Annotated[str, prefix_option()] = "",
    destination: Annotated[str, destination_option()] = DEFAULT_DESTINATION,
    list_objects: Annotated[bool, list_option()] = False,
    download: Annotated[bool, download_option()] = False,
    usage: Annotated[bool, usage_option()] = False,
    config_path: Annotated[str, config_option()] = DEFAULT_CONFIG_PATH,
    quiet: Annotated[bool, quiet_option()] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version."
        ),
    ] = None,
) -> None:
    """
    List, measure or download the objects under a bucket prefix.

    Exactly one of --list, --usage or --download is run; if several are
    given, --list takes precedence over --usage, and --usage over --download.
    """
    if quiet:
        setup_logging("WARNING")

    try:
        invocation = build_invocation(
            bucket=bucket,
            prefix=prefix,
            destination=destination,
            list_objects=list_objects,
            usage=usage,
            download=download,
        )

        storage_config = load_storage_config(config_path)
        manager = S3ClientManager(storage_config)
        manager.client  # build now so bad settings fail before any listing

        if invocation.mode is None:
            typer.echo("Nothing to do: pass --list, --usage or --download.")
            return

        if invocation.mode is Mode.USAGE:
            typer.echo("Getting usage...")

        result = run(invocation, manager, on_record=_echo_record)

        if invocation.mode is Mode.USAGE:
            typer.echo(f"Usage: {format_bytes(result)}")
        elif invocation.mode is Mode.DOWNLOAD:
            typer.echo(
                f"Download complete: {result.downloaded} downloaded, "
                f"{result.skipped_existing} already present, "
                f"{result.failed} failed"
            )

    except Exception as e:
        logger.error("Command failed", error=str(e))
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
