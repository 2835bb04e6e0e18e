from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

import structlog

from schemacopy.core.errors import AttributionError
from schemacopy.models.artifact import Artifact

logger = structlog.get_logger('attribution')


class ArtifactAttributor:
    """Maps an archive on disk back to the artifact that owns it."""

    def __init__(self, artifacts: Iterable[Artifact]):
        self._by_file: dict[Path, list[Artifact]] = defaultdict(list)
        for artifact in artifacts:
            if artifact.file is None:
                continue
            self._by_file[artifact.file.resolve()].append(artifact)

    def attribute(self, archive: Path) -> Artifact:
        owners = self._by_file.get(Path(archive).resolve(), [])
        if not owners:
            raise AttributionError(f"Unable to find artifact for archive {archive}")
        if len(owners) > 1:
            claimants = ', '.join(a.coordinates for a in owners)
            raise AttributionError(
                f"Archive {archive} is claimed by multiple artifacts: {claimants}",
            )
        return owners[0]
