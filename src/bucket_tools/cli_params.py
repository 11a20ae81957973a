"""Shared CLI parameter definitions.

Each function returns the Typer option used by the command line, keeping
flag names and help text in one place:

    @app.command()
    def main(bucket: Annotated[str, bucket_option()] = ""):
        pass
"""

from typing import Annotated

import typer


def bucket_option() -> Annotated[str, typer.Option]:
    """Bucket name option."""
    return typer.Option("--bucket", help="Bucket name")


def prefix_option() -> Annotated[str, typer.Option]:
    """Prefix option."""
    return typer.Option("--prefix", help="Prefix to act on")


def destination_option() -> Annotated[str, typer.Option]:
    """Download destination option."""
    return typer.Option(
        "--destination", help="Folder where downloaded items will be placed"
    )


def list_option() -> Annotated[bool, typer.Option]:
    """List mode flag."""
    return typer.Option("--list", help="List items matching prefix")


def usage_option() -> Annotated[bool, typer.Option]:
    """Usage mode flag."""
    return typer.Option(
        "--usage", help="Calculate space usage of items matching prefix"
    )


def download_option() -> Annotated[bool, typer.Option]:
    """Download mode flag."""
    return typer.Option("--download", help="Download items matching prefix")


def config_option() -> Annotated[str, typer.Option]:
    """Config file option."""
    return typer.Option("--config", help="Path to the YAML config file")


def quiet_option() -> Annotated[bool, typer.Option]:
    """Quiet flag."""
    return typer.Option(
        "--quiet", "-q", help="Only log warnings and errors to stderr"
    )
