import zipfile
from collections.abc import Callable
from collections.abc import Iterable

import structlog

from schemacopy.core.errors import ScanError
from schemacopy.models.root import ScanRoot

logger = structlog.get_logger('scanner')

ResourcePredicate = Callable[[str], bool]


def suffix_predicate(suffix: str) -> ResourcePredicate:
    """Exact, case-sensitive suffix match on the last path segment."""
    def matches(name: str) -> bool:
        return bool(name) and name.rsplit('/', 1)[-1].endswith(suffix)
    matches.__name__ = f"suffix_predicate({suffix!r})"
    return matches


class ResourceScanner:
    """Finds distinct schema resource names across all scan roots."""

    def __init__(self, predicate: ResourcePredicate):
        self.predicate = predicate

    def scan_root(self, root: ScanRoot) -> set[str]:
        try:
            return {name for name in root.iter_entries() if self.predicate(name)}
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ScanError(f"Unable to scan {root.kind} {root.path}: {e}") from e

    def scan(self, roots: Iterable[ScanRoot]) -> set[str]:
        names: set[str] = set()
        scanned = 0
        for root in roots:
            found = self.scan_root(root)
            if found:
                logger.debug(
                    'Scanned root', root=str(root.path), kind=str(root.kind),
                    resources=len(found),
                )
            names |= found
            scanned += 1
        logger.info('Scan complete', roots=scanned, resources=len(names))
        return names
