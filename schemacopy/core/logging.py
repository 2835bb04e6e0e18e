import logging
import os
import sys
from typing import Any

import structlog
from rich.console import Console

# Central console for rich output
console = Console()


class RichConsoleRenderer:
    """
    Render structlog events through rich.

    Events come out as `<time> <logger> <level> <event> key=value ...`. An
    optional `_style` key in the event dict styles the whole line.
    """

    level_styles = {
        'debug': 'dim',
        'info': 'green',
        'warning': 'yellow',
        'error': 'bold red',
        'critical': 'bold magenta',
    }

    def __init__(self, target: Console | None = None):
        self._console = target or console

    def __call__(self, logger, name, event_dict):
        custom_style = event_dict.pop('_style', None)
        event = event_dict.pop('event', '')
        log_level = event_dict.pop('level', 'info')
        logger_name = event_dict.pop('logger', None)
        timestamp = event_dict.pop('timestamp', None)
        exception = event_dict.pop('exception', None)
        stack = event_dict.pop('stack', None)

        level_style = self.level_styles.get(log_level, 'white')
        parts = []
        if timestamp:
            parts.append(f"[dim]{timestamp}[/dim]")
        if logger_name:
            parts.append(f"[bold]{logger_name}[/bold]")
        parts.append(f"[{level_style}]{log_level:<8}[/{level_style}]")
        parts.append(str(event))
        parts.extend(
            f"[cyan]{key}[/cyan]=[green]{value!r}[/green]"
            for key, value in event_dict.items()
        )

        line = ' '.join(parts)
        if exception:
            line += f"\n[red]{exception}[/red]"
        if stack:
            line += f"\n[dim]{stack}[/dim]"

        self._console.print(line, style=custom_style, highlight=False)
        raise structlog.DropEvent


def drop_style_processor(logger, method_name, event_dict):
    """Keep the rich-only `_style` hint out of JSON output."""
    event_dict.pop('_style', None)
    return event_dict


def _json_output() -> bool:
    return (
        os.getenv('SCHEMACOPY_LOG_FORMAT') == 'json'
        or os.getenv('ENV') == 'production'
    )


def setup_logging(level: str = 'INFO') -> None:
    """Configure structlog for the CLI."""
    logging.basicConfig(
        format='%(message)s', stream=sys.stdout, level=level, force=True,
    )

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if _json_output():
        renderer: list[Any] = [
            drop_style_processor,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [RichConsoleRenderer()]

    structlog.configure(
        processors=shared_processors + renderer,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
