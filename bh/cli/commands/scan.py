"""
Scan Commands.

Commands for dispatching scans.
"""

from typing import List, Optional
from uuid import UUID

import typer

from bh.cli.runtime import execute, fail
from bh.cli.validation import build_inputs, valid_scan_name
from bh.core.exceptions import ValidationError

app = typer.Typer(help="Scan related commands", no_args_is_help=True)


@app.command()
def dispatch(
    workflow_id: UUID = typer.Option(
        ..., "--workflow-id", "-w", envvar="BOUNTYHUB_WORKFLOW_ID", help="Workflow ID",
    ),
    scan_name: str = typer.Option(
        ..., "--scan-name", "-s", envvar="BOUNTYHUB_SCAN_NAME", help="Scan to dispatch",
    ),
    input_string: Optional[List[str]] = typer.Option(
        None, "--input-string", help="String input as key=value (repeatable)",
    ),
    input_bool: Optional[List[str]] = typer.Option(
        None, "--input-bool", help="Boolean input as key=true|false (repeatable)",
    ),
) -> None:
    """
    Dispatch a scan from the latest revision of the workflow.

    Examples:
        bh scan dispatch -w 0190c6a2-... -s subdomains
        bh scan dispatch -w 0190c6a2-... -s subdomains --input-string domain=example.com --input-bool deep=true
    """
    if not valid_scan_name(scan_name):
        fail(f"Invalid scan name: '{scan_name}'")

    try:
        inputs = build_inputs(input_string, input_bool)
    except ValidationError as e:
        fail(e.message)

    execute(
        lambda service: service.dispatch_scan(workflow_id, scan_name, inputs),
        "Failed to dispatch scan",
    )
