"""
Command Runtime.

Shared plumbing for commands that talk to BountyHub: builds the service,
runs the async operation, always closes the HTTP clients, and turns any
ApplicationError into `Error: ...` on stderr with exit status 1.

Usage:
    def delete(job_id: UUID = ...) -> None:
        execute(lambda service: service.delete_job(job_id), "Failed to delete job")
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import NoReturn, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from bh.cli.client import get_api_client
from bh.core.exceptions import ApplicationError
from bh.core.logging import get_logger, log_with_source
from bh.services.bountyhub import BountyHubService

logger = get_logger(__name__)

err_console = Console(stderr=True)

T = TypeVar("T")


def fail(message: str) -> NoReturn:
    """Print an error line to stderr and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True, highlight=False)
    raise typer.Exit(1)


def get_bountyhub_service() -> BountyHubService:
    """Build the service on top of the configured API client."""
    return BountyHubService(get_api_client())


def execute(
    operation: Callable[[BountyHubService], Awaitable[T]],
    error_context: str,
    messages: dict[type[ApplicationError], str] | None = None,
) -> T:
    """
    Run one remote operation to completion.

    Args:
        operation: Coroutine factory receiving the service
        error_context: Prefix for error messages, e.g. "Failed to delete job"
        messages: Full replacement messages for specific error types

    Returns:
        Whatever the operation returns

    Raises:
        typer.Exit: With code 1 on configuration or remote errors
    """
    try:
        service = get_bountyhub_service()
    except ApplicationError as e:
        fail(e.message)

    async def _run() -> T:
        try:
            return await operation(service)
        finally:
            await service.close()

    try:
        return asyncio.run(_run())
    except ApplicationError as e:
        log_with_source(logger, "cli", "debug", "Command failed", code=e.code, error=e.message)
        for exc_type, message in (messages or {}).items():
            if isinstance(e, exc_type):
                fail(message)
        fail(f"{error_context}: {e.message}")
