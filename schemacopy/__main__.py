import typer

from schemacopy.__version__ import __version__
from schemacopy.commands import copy
from schemacopy.commands import scan
from schemacopy.core.logging import console
from schemacopy.core.logging import setup_logging

app = typer.Typer(
    help='schemacopy: materialize schema files bundled in dependency archives.',
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)

app.command(name='copy')(copy.main)
app.command(name='scan')(scan.main)


def _print_version(value: bool):
    if value:
        console.print(f"schemacopy {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: bool = typer.Option(False, '--debug', help='Enable debug logging'),
    version: bool = typer.Option(
        False, '--version', callback=_print_version, is_eager=True,
        help='Show version and exit',
    ),
):
    """
    Copy schema files out of resolved dependencies.
    """
    level = 'DEBUG' if debug else 'INFO'
    setup_logging(level=level)


if __name__ == '__main__':
    app()
