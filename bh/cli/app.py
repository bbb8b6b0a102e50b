"""
bh - BountyHub CLI.

Root Typer application. Registers the command groups and the global
logging options.

Usage:
    bh --help
    bh -v job delete -j <job-id>          # INFO logging on stderr
    bh --debug blob upload -s f --dst p    # DEBUG logging on stderr
    bh --version

Options:
    --verbose, -v     Enable verbose output (INFO level logging)
    --debug, -d       Enable debug mode (DEBUG level logging)
    --version         Show the version and exit
"""

import typer
from pydantic import ValidationError as PydanticValidationError

from bh import __version__
from bh.cli.commands import (
    bhlast_app,
    blob_app,
    completion,
    job_app,
    md_app,
    runner_app,
    scan_app,
)
from bh.cli.runtime import fail
from bh.core.config import get_settings
from bh.core.logging import get_logger, log_with_source, setup_logging

logger = get_logger(__name__)

app = typer.Typer(
    name="bh",
    help=(
        "BountyHub command-line client.\n\n"
        "Commands rely on the BOUNTYHUB_TOKEN and BOUNTYHUB_URL environment variables."
    ),
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(job_app, name="job")
app.add_typer(scan_app, name="scan")
app.add_typer(blob_app, name="blob")
app.add_typer(runner_app, name="runner")
app.add_typer(bhlast_app, name="bhlast")
app.add_typer(md_app, name="md")
app.command(name="completion")(completion)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bh {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    BountyHub command-line client.

    Download and delete job artifacts, dispatch scans, move blobs, and
    register runners.
    """
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        fail(f"Invalid configuration: {e.errors()[0]['msg']}")

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    else:
        level = settings.log_level

    setup_logging(level=level, log_file=settings.log_file)
    log_with_source(logger, "cli", "debug", "Logging configured", log_level=level or "default")


def run() -> None:
    """Console script entry point."""
    app(prog_name="bh")


if __name__ == "__main__":
    run()
