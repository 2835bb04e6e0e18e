from pathlib import Path

import structlog
import typer
from rich.table import Table

from schemacopy.core.config import SchemaCopyConfig
from schemacopy.core.decorators import handle_errors
from schemacopy.core.logging import console
from schemacopy.core.manifest import load_manifest
from schemacopy.services.pipeline_service import CopyPipeline

logger = structlog.get_logger('scan_command')


@handle_errors
def main(
    manifest: Path = typer.Argument(
        ..., help='Resolution manifest (JSON) produced by the build',
    ),
    output_dir: Path | None = typer.Option(
        None, '--output-dir', '-o', help='Output directory used to compute destinations',
    ),
    suffix: str | None = typer.Option(
        None, help='File name suffix selecting schema files (default .proto)',
    ),
    extra_root: list[str] | None = typer.Option(
        None, '--extra-root', help='Additional archive or directory to scan',
    ),
):
    """
    Show which schema files would be copied, and from which artifact, without writing.
    """
    config = SchemaCopyConfig.load(
        output_dir=output_dir, suffix=suffix, extra_roots=extra_root,
    )
    pipeline = CopyPipeline(config, load_manifest(manifest))

    reason = pipeline.skip_reason()
    if reason:
        console.print(f"[yellow]{reason}; `copy` would do nothing.[/]")
        return

    entries = pipeline.plan()
    if not entries:
        console.print('[dim]No schema files found.[/]')
        return

    table = Table(title=f"Schema Files ({len(entries)})")
    table.add_column('Resource', style='cyan')
    table.add_column('Artifact', style='magenta')
    table.add_column('Destination', style='green')
    for entry in entries:
        table.add_row(entry.resource_name, entry.artifact.coordinates, str(entry.target))
    console.print(table)
