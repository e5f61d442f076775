"""Error handling utilities for CLI commands."""

import functools
import logging
from typing import Any, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from buildstamp.exceptions import BuildstampError, ConfigurationError, ProjectMetadataError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_error(
    operation: str,
    console: Optional[Console] = None,
    exit_code: int = 1,
) -> Callable[[F], F]:
    """Decorator for consistent CLI command error handling.

    Args:
        operation: Description of the operation for error messages
        console: Rich Console instance for output (creates one if not provided)
        exit_code: Exit code to use on error (default: 1)

    Usage:
        @app.command()
        @handle_cli_error("resolving version")
        def version():
            ...
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            _console = console or Console(stderr=True)
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except ProjectMetadataError as e:
                _console.print(f"[red]Project metadata error: {escape(str(e))}[/red]")
                raise typer.Exit(exit_code) from e
            except ConfigurationError as e:
                _console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
                raise typer.Exit(exit_code) from e
            except BuildstampError as e:
                _console.print(f"[red]Error {operation}: {escape(str(e))}[/red]")
                logger.debug(f"Error during {operation}: {e}", exc_info=True)
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
