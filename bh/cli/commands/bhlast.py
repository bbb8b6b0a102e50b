"""
Bhlast Commands.

Commands for bhlast interaction domains.
"""

import typer

from bh.cli.runtime import execute
from bh.core.exceptions import AuthenticationError, AuthorizationError

app = typer.Typer(help="Bhlast related commands", no_args_is_help=True)


@app.command()
def create() -> None:
    """
    Create a new bhlast server.

    Prints the id of the created domain.
    """
    domain_id = execute(
        lambda service: service.create_bhlast_domain(),
        "Failed to create bhlast domain",
        messages={
            AuthorizationError: "You cannot create more bhlast domains",
            AuthenticationError: "Unauthorized: invalid token",
        },
    )
    typer.echo(domain_id)
