import functools
from collections.abc import Callable
from typing import Any

import structlog
import typer

from schemacopy.core.errors import SchemaCopyError
from schemacopy.core.logging import console
logger = structlog.get_logger()


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator turning pipeline failures into a single message and exit code."""
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except SchemaCopyError as e:
            console.print(f"[bold red]{e.label}:[/] {e}")
            if e.__cause__ is not None:
                console.print(f"[red]Caused by:[/] {e.__cause__}")
            logger.debug('Pipeline error', exc_info=True)
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"[bold red]Validation Error:[/] {e}")
            logger.debug('Validation error', exc_info=True)
            raise typer.Exit(1)
        except KeyboardInterrupt:
            console.print('\n[yellow]Operation cancelled by user.[/]')
            raise typer.Exit(130)
        except Exception as e:
            console.print(f"[bold red]Unexpected Error:[/] {e}")
            logger.exception('Unexpected error')
            raise typer.Exit(1)
    return wrapper
