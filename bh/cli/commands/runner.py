"""
Runner Commands.

Commands for registering self-hosted runners.
"""

import typer

from bh.cli.runtime import execute

app = typer.Typer(help="Runner related commands", no_args_is_help=True)
registration_app = typer.Typer(help="Runner registration commands", no_args_is_help=True)
app.add_typer(registration_app, name="registration")


@registration_app.command()
def token() -> None:
    """
    Get newly created runner registration token.

    The token is printed without a trailing newline so it can be captured
    directly, e.g. TOKEN=$(bh runner registration token).
    """
    registration = execute(
        lambda service: service.create_runner_registration(),
        "Failed to create runner registration",
    )
    typer.echo(registration.token, nl=False)


@registration_app.command()
def command() -> None:
    """
    Get runner registration command with newly created token.

    Examples:
        bh runner registration command | sh
    """
    registration = execute(
        lambda service: service.create_runner_registration(),
        "Failed to create runner registration",
    )
    typer.echo(f'runner configure --token "{registration.token}" --url "{registration.url}"')
