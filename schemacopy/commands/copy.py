from pathlib import Path

import dotenv
import structlog
import typer
from rich.progress import BarColumn
from rich.progress import MofNCompleteColumn
from rich.progress import Progress
from rich.progress import SpinnerColumn
from rich.progress import TaskProgressColumn
from rich.progress import TextColumn
from rich.progress import TimeElapsedColumn
from rich.table import Table

from schemacopy.core.config import SchemaCopyConfig
from schemacopy.core.decorators import handle_errors
from schemacopy.core.logging import console
from schemacopy.core.manifest import load_manifest
from schemacopy.services.pipeline_service import CopyPipeline
from schemacopy.services.pipeline_service import CopyReport

logger = structlog.get_logger('copy_command')
dotenv.load_dotenv()


def print_summary(report: CopyReport, output_dir: Path):
    table = Table(title='Copy Summary')
    table.add_column('Metric', style='cyan')
    table.add_column('Value', style='magenta')
    table.add_row('Output Directory', str(output_dir))
    table.add_row('Schema Files Found', str(report.stats.total))
    table.add_row('Files Copied', str(report.stats.copied))
    table.add_row('Bytes Written', f"{report.stats.bytes_written:,}")
    table.add_row('Total Duration', f"{report.stats.elapsed_time:.2f}s")
    console.print(table)


@handle_errors
def main(
    manifest: Path = typer.Argument(
        ..., help='Resolution manifest (JSON) produced by the build',
    ),
    output_dir: Path | None = typer.Option(
        None, '--output-dir', '-o', help='Where to materialize schema files',
    ),
    skip: bool = typer.Option(
        False, '--skip', help='Do nothing and exit successfully',
    ),
    suffix: str | None = typer.Option(
        None, help='File name suffix selecting schema files (default .proto)',
    ),
    workers: int | None = typer.Option(
        None, help='Number of concurrent copy workers',
    ),
    extra_root: list[str] | None = typer.Option(
        None, '--extra-root', help='Additional archive or directory to scan',
    ),
):
    """
    Copy schema files from resolved dependencies into the output directory.
    """
    config = SchemaCopyConfig.load(
        output_dir=output_dir, skip=skip or None, suffix=suffix, workers=workers,
        extra_roots=extra_root,
    )
    if config.skip:
        # Skipping must not depend on the manifest being readable
        logger.info('Skipping plugin execution')
        return

    pipeline = CopyPipeline(config, load_manifest(manifest))

    with Progress(
        SpinnerColumn(), TextColumn('[progress.description]{task.description}'),
        BarColumn(), TaskProgressColumn(), MofNCompleteColumn(), TextColumn('•'),
        TimeElapsedColumn(), console=console, transient=True,
    ) as progress:
        task = progress.add_task('Copying schema files...', total=None)

        def advance(copied: int):
            progress.advance(task)

        report = pipeline.run(on_advance=advance)

    if report.skipped:
        return
    print_summary(report, config.output_dir)
