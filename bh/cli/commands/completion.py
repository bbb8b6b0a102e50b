"""
Shell Completion Command.

Prints the completion script for a shell. The script comes from Typer's
own completion templates, the ones behind `--show-completion`, so it
speaks the same `_BH_COMPLETE=complete_<shell>` protocol the runtime
answers to.
"""

from enum import Enum

import typer
from typer._completion_shared import get_completion_script


class Shell(str, Enum):
    bash = "bash"
    zsh = "zsh"
    fish = "fish"
    powershell = "powershell"
    pwsh = "pwsh"


def completion_var(prog_name: str) -> str:
    return f"_{prog_name}_COMPLETE".replace("-", "_").upper()


def completion(
    ctx: typer.Context,
    shell: Shell = typer.Argument(..., help="Shell to generate the completion script for"),
) -> None:
    """
    Generate a shell completion script.

    Examples:
        bh completion bash > ~/.local/share/bash-completion/completions/bh
        bh completion zsh > "${fpath[1]}/_bh"
        bh completion fish > ~/.config/fish/completions/bh.fish
        bh completion pwsh >> $PROFILE
    """
    prog_name = ctx.find_root().info_name or "bh"
    script = get_completion_script(
        prog_name=prog_name,
        complete_var=completion_var(prog_name),
        shell=shell.value,
    )
    typer.echo(script)
