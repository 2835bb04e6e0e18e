"""Loading the resolution manifest handed over by the build."""
from pathlib import Path

import structlog
from pydantic import ValidationError

from schemacopy.core.errors import ResolutionError
from schemacopy.models.manifest import ResolutionManifest

logger = structlog.get_logger('manifest')


def load_manifest(path: str | Path) -> ResolutionManifest:
    """
    Read and validate a resolution manifest.

    Relative artifact files and classpath entries are kept as written; they are
    interpreted against the current working directory, like build classpaths.

    Raises:
        ResolutionError if the manifest is missing, unreadable or invalid.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding='utf-8')
    except OSError as e:
        raise ResolutionError(
            f"Error resolving dependencies: cannot read manifest {path}",
        ) from e

    try:
        manifest = ResolutionManifest.model_validate_json(raw)
    except ValidationError as e:
        raise ResolutionError(
            f"Error resolving dependencies: invalid manifest {path} "
            f"({e.error_count()} problem(s))",
        ) from e

    logger.debug(
        'Loaded manifest', path=str(path), artifacts=len(manifest.artifacts),
        packaging=manifest.packaging,
    )
    return manifest
