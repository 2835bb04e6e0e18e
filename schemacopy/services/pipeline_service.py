import zipfile
from collections.abc import Callable
from concurrent.futures import as_completed
from concurrent.futures import Future
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

import structlog

from schemacopy.core.config import SchemaCopyConfig
from schemacopy.core.errors import CopyError
from schemacopy.core.layout import output_path_for
from schemacopy.core.stats import CopyStats
from schemacopy.models.artifact import Artifact
from schemacopy.models.manifest import ResolutionManifest
from schemacopy.models.root import ScanRoot
from schemacopy.services.attribution_service import ArtifactAttributor
from schemacopy.services.copy_service import CopyService
from schemacopy.services.locator_service import locate
from schemacopy.services.resolver_service import ResolvedLocation
from schemacopy.services.resolver_service import ResourceResolver
from schemacopy.services.resolver_service import SearchPath
from schemacopy.services.scanner_service import ResourcePredicate
from schemacopy.services.scanner_service import ResourceScanner
from schemacopy.services.scanner_service import suffix_predicate

logger = structlog.get_logger('pipeline')


@dataclass(frozen=True)
class CopyPlanEntry:
    """One schema file, where it comes from, and where it goes."""
    location: ResolvedLocation
    artifact: Artifact
    target: Path

    @property
    def resource_name(self) -> str:
        return self.location.name


@dataclass
class CopyReport:
    stats: CopyStats = field(default_factory=CopyStats)
    entries: list[CopyPlanEntry] = field(default_factory=list)
    skipped_reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


class CopyPipeline:
    """Scan, resolve, attribute and copy schema files for one project."""

    def __init__(
        self,
        config: SchemaCopyConfig,
        manifest: ResolutionManifest,
        predicate: ResourcePredicate | None = None,
    ):
        self.config = config
        self.manifest = manifest
        self.predicate = predicate or suffix_predicate(config.suffix)

    def skip_reason(self) -> str | None:
        if self.config.skip:
            return 'Skipping plugin execution'
        if self.manifest.is_metadata_only:
            return f"Skipping {self.manifest.packaging} project"
        return None

    def roots(self) -> list[ScanRoot]:
        extra = [*self.manifest.extra_roots, *self.config.extra_roots]
        return locate(self.manifest.classpath_elements(), extra)

    def discover(self, roots: list[ScanRoot]) -> list[str]:
        """Closed-world scan; sorted so runs are reproducible."""
        return sorted(ResourceScanner(self.predicate).scan(roots))

    def plan_resource(
        self,
        name: str,
        resolver: ResourceResolver,
        attributor: ArtifactAttributor,
    ) -> list[CopyPlanEntry]:
        entries = []
        for location in resolver.resolve(name):
            archive = resolver.containing_archive(location)
            artifact = attributor.attribute(archive)
            target = output_path_for(
                self.config.output_dir, artifact.group_id, artifact.artifact_id, name,
            )
            entries.append(CopyPlanEntry(location, artifact, target))
        return entries

    def plan(self) -> list[CopyPlanEntry]:
        """Everything `run` would copy, without touching the output tree."""
        roots = self.roots()
        names = self.discover(roots)
        resolver = ResourceResolver(SearchPath(roots))
        attributor = ArtifactAttributor(self.manifest.artifacts)
        entries = []
        for name in names:
            entries.extend(self.plan_resource(name, resolver, attributor))
        return entries

    def run(self, on_advance: Callable[[int], None] | None = None) -> CopyReport:
        """
        Materialize every discovered schema file.

        `on_advance` is called once per resource name with the number of
        files copied for it. The first failure cancels outstanding work and
        is re-raised.
        """
        reason = self.skip_reason()
        if reason:
            logger.info(reason)
            return CopyReport(skipped_reason=reason)

        roots = self.roots()
        logger.info('Scanning', roots=len(roots), suffix=self.config.suffix)
        names = self.discover(roots)

        report = CopyReport(stats=CopyStats(total=len(names)))
        if not names:
            logger.info('No schema files found')
            return report

        resolver = ResourceResolver(SearchPath(roots))
        attributor = ArtifactAttributor(self.manifest.artifacts)
        copier = CopyService(self.config.output_dir)

        with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
            futures: dict[Future, str] = {
                executor.submit(
                    self._copy_resource, name, resolver, attributor, copier, report.stats,
                ): name
                for name in names
            }
            try:
                for future in as_completed(futures):
                    entries = future.result()
                    report.entries.extend(entries)
                    if on_advance:
                        on_advance(len(entries))
            except BaseException:
                report.stats.inc_failed()
                for pending in futures:
                    pending.cancel()
                raise

        report.entries.sort(key=lambda e: (str(e.target), str(e.location.root.path)))
        logger.info(
            'Copy complete', output=str(self.config.output_dir),
            resources=report.stats.total, copied=report.stats.copied,
            bytes=report.stats.bytes_written,
            elapsed=f"{report.stats.elapsed_time:.2f}s",
        )
        return report

    def _copy_resource(
        self,
        name: str,
        resolver: ResourceResolver,
        attributor: ArtifactAttributor,
        copier: CopyService,
        stats: CopyStats,
    ) -> list[CopyPlanEntry]:
        entries = self.plan_resource(name, resolver, attributor)
        for entry in entries:
            try:
                with entry.location.open() as source:
                    size = copier.copy(source, entry.target, name)
            except (OSError, KeyError, zipfile.BadZipFile) as e:
                raise CopyError(
                    f"Error copying schema file {name} from {entry.location.root.path}: {e}",
                ) from e
            stats.inc_copied(size)
            logger.info(
                'Copied schema file', resource=name,
                artifact=entry.artifact.coordinates, target=str(entry.target),
            )
        return entries
