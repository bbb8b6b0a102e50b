"""
Markdown Commands.

Renders the command tree as a single markdown document, suitable for
committing as CLI.md.
"""

from collections.abc import Iterator
from typing import Any

import typer

app = typer.Typer(help="Markdown related commands", no_args_is_help=True)


def _anchor(command_path: str) -> str:
    return command_path.replace(" ", "-").lower()


def _is_group(command: Any) -> bool:
    return hasattr(command, "list_commands") and hasattr(command, "get_command")


def _subcommands(ctx: typer.Context) -> Iterator[tuple[str, Any]]:
    """Visible subcommands of a group, in listing order."""
    command = ctx.command
    if not _is_group(command):
        return
    for name in command.list_commands(ctx):
        sub = command.get_command(ctx, name)
        if sub is not None and not sub.hidden:
            yield name, sub


def _walk(ctx: typer.Context) -> Iterator[typer.Context]:
    """Depth-first traversal of visible commands, each with its own context."""
    yield ctx
    for name, sub in _subcommands(ctx):
        yield from _walk(sub.context_class(sub, info_name=name, parent=ctx))


def _param_extras(param: Any) -> list[str]:
    extras: list[str] = []
    choices = getattr(param.type, "choices", None)
    if choices:
        extras.append("possible values: " + ", ".join(f"`{c}`" for c in choices))
    envvar = getattr(param, "envvar", None)
    if envvar:
        names = [envvar] if isinstance(envvar, str) else list(envvar)
        extras.append("env: " + ", ".join(f"`{n}`" for n in names))
    is_flag = getattr(param, "is_flag", False)
    if param.required:
        extras.append("required")
    elif not is_flag and param.default not in (None, (), []) and not callable(param.default):
        extras.append(f"default: `{param.default}`")
    return extras


def _render_param(param: Any) -> str:
    if param.param_type_name == "option":
        names = ", ".join(f"`{opt}`" for opt in param.opts + param.secondary_opts)
        label = names if param.is_flag else f"{names} `<{param.name.upper()}>`"
    else:
        label = f"`<{param.human_readable_name}>`"

    text = getattr(param, "help", None) or ""
    extras = _param_extras(param)
    if extras:
        text = f"{text} [{'; '.join(extras)}]".strip()
    return f"* {label}" + (f": {text}" if text else "")


def _render_command(ctx: typer.Context) -> list[str]:
    command = ctx.command
    lines = [f"## `{ctx.command_path}`", ""]

    if command.help:
        lines.extend([command.help.strip(), ""])

    pieces = command.collect_usage_pieces(ctx)
    lines.extend([f"**Usage:** `{' '.join([ctx.command_path, *pieces])}`", ""])

    subcommands = [f"* `{name}`: {sub.get_short_help_str(limit=200)}" for name, sub in _subcommands(ctx)]
    if subcommands:
        lines.extend(["###### **Subcommands:**", "", *subcommands, ""])

    params = [p for p in command.get_params(ctx) if p.name != "help" and not getattr(p, "hidden", False)]
    arguments = [p for p in params if p.param_type_name == "argument"]
    options = [p for p in params if p.param_type_name == "option"]

    if arguments:
        lines.extend(["###### **Arguments:**", "", *(_render_param(p) for p in arguments), ""])
    if options:
        lines.extend(["###### **Options:**", "", *(_render_param(p) for p in options), ""])

    return lines


def render_markdown(command: Any, prog_name: str) -> str:
    """
    Render help for `command` and every visible subcommand.

    Args:
        command: Root command (typer.main.get_command(app))
        prog_name: Program name used in command paths

    Returns:
        Markdown document
    """
    root_ctx = command.context_class(command, info_name=prog_name)
    contexts = list(_walk(root_ctx))

    lines = [
        f"# Command-Line Help for `{prog_name}`",
        "",
        f"This document contains the help content for the `{prog_name}` command-line program.",
        "",
        "**Command Overview:**",
        "",
    ]
    lines.extend(f"* [`{c.command_path}`](#{_anchor(c.command_path)})" for c in contexts)
    lines.append("")

    for ctx in contexts:
        lines.extend(_render_command(ctx))

    return "\n".join(lines).rstrip() + "\n"


@app.command()
def docs(ctx: typer.Context) -> None:
    """
    Generate markdown documentation for the CLI.

    Examples:
        bh md docs > CLI.md
    """
    root = ctx.find_root()
    typer.echo(render_markdown(root.command, root.info_name or "bh"), nl=False)
