from collections.abc import Iterable
from pathlib import Path

import structlog

from schemacopy.models.root import ArchiveRoot
from schemacopy.models.root import root_for
from schemacopy.models.root import ScanRoot

logger = structlog.get_logger('locator')


def present_files(paths: Iterable[str]) -> list[Path]:
    """
    Keep the classpath entries that exist as regular files.

    Build classpaths routinely list output directories that were never created
    or dependencies that did not resolve; those are dropped without complaint.
    """
    files = []
    for path in paths:
        file = Path(path)
        if file.absolute().is_file():
            files.append(file)
        else:
            logger.debug('Dropping classpath entry', path=path)
    return files


def to_roots(paths: Iterable[str]) -> list[ScanRoot]:
    """Archive roots for every present classpath file, in order, deduplicated."""
    return _dedupe(ArchiveRoot(file) for file in present_files(paths))


def extra_roots(paths: Iterable[str]) -> list[ScanRoot]:
    """
    Roots that are scanned but not necessarily backed by an artifact.

    Unlike classpath entries these may be directories.
    """
    roots = []
    for path in paths:
        candidate = Path(path).absolute()
        if candidate.is_file() or candidate.is_dir():
            roots.append(root_for(candidate))
        else:
            logger.debug('Dropping extra root', path=path)
    return _dedupe(roots)


def _dedupe(roots: Iterable[ScanRoot]) -> list[ScanRoot]:
    seen: set[Path] = set()
    unique = []
    for root in roots:
        key = root.canonical()
        if key in seen:
            continue
        seen.add(key)
        unique.append(root)
    return unique


def locate(classpath: Iterable[str], extra: Iterable[str] = ()) -> list[ScanRoot]:
    """Full scan path: classpath archives first, then extra roots."""
    return _dedupe([*to_roots(classpath), *extra_roots(extra)])
