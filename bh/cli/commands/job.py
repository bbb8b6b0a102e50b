"""
Job Commands.

Commands for jobs and the artifacts they upload.
"""

from pathlib import Path
from typing import Optional
from uuid import UUID

import typer

from bh.cli.paths import resolve_artifact_destination
from bh.cli.runtime import execute

app = typer.Typer(help="Job related commands", no_args_is_help=True)
artifact_app = typer.Typer(help="Job artifact related commands", no_args_is_help=True)
app.add_typer(artifact_app, name="artifact")


@app.command()
def delete(
    job_id: UUID = typer.Option(..., "--job-id", "-j", envvar="BOUNTYHUB_JOB_ID", help="Job ID"),
) -> None:
    """
    Delete a job.

    Examples:
        bh job delete -j 0190c6a2-...
        BOUNTYHUB_JOB_ID=0190c6a2-... bh job delete
    """
    execute(lambda service: service.delete_job(job_id), "Failed to delete job")


@artifact_app.command("download")
def artifact_download(
    job_id: UUID = typer.Option(..., "--job-id", "-j", envvar="BOUNTYHUB_JOB_ID", help="Job ID"),
    artifact_name: str = typer.Option(
        ...,
        "--artifact-name", "-a",
        envvar="BOUNTYHUB_JOB_ARTIFACT_NAME",
        help="Name of the artifact uploaded by the job",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        envvar="BOUNTYHUB_OUTPUT",
        help="Destination file, or directory to place the artifact in [default: current directory]",
    ),
) -> None:
    """
    Download an artifact uploaded by a job.

    Examples:
        bh job artifact download -j 0190c6a2-... -a results.zip
        bh job artifact download -j 0190c6a2-... -a results.zip -o ./out/
    """
    destination = resolve_artifact_destination(artifact_name, output)
    execute(
        lambda service: service.download_job_artifact(job_id, artifact_name, destination),
        "Failed to download job artifact",
    )


@artifact_app.command("delete")
def artifact_delete(
    job_id: UUID = typer.Option(..., "--job-id", "-j", envvar="BOUNTYHUB_JOB_ID", help="Job ID"),
    artifact_name: str = typer.Option(
        ...,
        "--artifact-name", "-a",
        envvar="BOUNTYHUB_JOB_ARTIFACT_NAME",
        help="Name of the artifact uploaded by the job",
    ),
) -> None:
    """
    Delete job artifact.

    Examples:
        bh job artifact delete -j 0190c6a2-... -a results.zip
    """
    execute(
        lambda service: service.delete_job_artifact(job_id, artifact_name),
        "Failed to delete job artifact",
    )
