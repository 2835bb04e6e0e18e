import zipfile
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from schemacopy.core.errors import ConsistencyError
from schemacopy.core.errors import ScanError
from schemacopy.models.root import ScanRoot


@dataclass(frozen=True)
class ResolvedLocation:
    """A resource name paired with the root it was found in."""
    name: str
    root: ScanRoot

    def open(self):
        return self.root.open(self.name)

    def __str__(self) -> str:
        return f"{self.root.path}!/{self.name}"


class SearchPath:
    """Unified lookup over an ordered set of roots."""

    def __init__(self, roots: Sequence[ScanRoot]):
        self.roots = list(roots)

    def find_resources(self, name: str) -> list[ResolvedLocation]:
        locations = []
        for root in self.roots:
            try:
                found = root.contains(name)
            except (OSError, zipfile.BadZipFile) as e:
                raise ScanError(
                    f"Unable to read {root.kind} {root.path} while resolving {name}: {e}",
                ) from e
            if found:
                locations.append(ResolvedLocation(name, root))
        return locations


class ResourceResolver:
    def __init__(self, search_path: SearchPath):
        self.search_path = search_path

    def resolve(self, name: str) -> list[ResolvedLocation]:
        """All locations of `name`; never empty."""
        locations = self.search_path.find_resources(name)
        if not locations:
            raise ConsistencyError(f"Schema file {name} seems to have disappeared")
        return locations

    @staticmethod
    def containing_archive(location: ResolvedLocation) -> Path:
        if not location.root.is_archive:
            raise ConsistencyError(
                f"Expected schema file {location.name} to be inside an archive, "
                f"found it in {location.root.kind} {location.root.path}",
            )
        return location.root.path
