"""
Blob Commands.

Commands for BountyHub blob storage.
"""

from pathlib import Path
from typing import Optional

import typer

from bh.cli.paths import resolve_blob_destination
from bh.cli.runtime import execute, fail
from bh.core.exceptions import ValidationError

app = typer.Typer(help="Blob related commands", no_args_is_help=True)


@app.command()
def download(
    src: str = typer.Option(..., "--src", "-s", help="Path of the file in BountyHub blob storage"),
    dst: Optional[Path] = typer.Option(
        None,
        "--dst", "-d",
        envvar="BOUNTYHUB_OUTPUT",
        help="Destination file, or directory to place the blob in [default: current directory]",
    ),
) -> None:
    """
    Download a file from BountyHub blob storage.

    Examples:
        bh blob download -s wordlists/dns.txt
        bh blob download -s wordlists/dns.txt -d ./data/
    """
    try:
        destination = resolve_blob_destination(src, dst)
    except ValidationError as e:
        fail(e.message)

    execute(
        lambda service: service.download_blob_file(src, destination),
        "Failed to download blob file",
    )


@app.command()
def upload(
    src: Path = typer.Option(
        ...,
        "--src", "-s",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Source file on the local filesystem",
    ),
    dst: str = typer.Option(..., "--dst", help="Destination path in BountyHub blob storage"),
) -> None:
    """
    Upload a file to BountyHub blob storage.

    Examples:
        bh blob upload -s ./dns.txt --dst wordlists/dns.txt
    """
    execute(
        lambda service: service.upload_blob_file(src, dst),
        "Failed to upload blob file",
    )
