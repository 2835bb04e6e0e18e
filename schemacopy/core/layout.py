"""Destination layout of the materialized schema tree."""
import os
from pathlib import Path


def output_path_for(
    output_root: Path, group_id: str, artifact_id: str, resource_name: str,
) -> Path:
    """
    Compute where a schema file lands.

    `com.example.api` / `schemas` / `foo/bar.proto` under `out` becomes
    `out/com/example/api/schemas/foo/bar.proto`. The resource name is appended
    verbatim; containment is checked by the copy step, not here.
    """
    target = Path(output_root)
    for part in group_id.split('.'):
        target = target / part
    target = target / artifact_id
    return target / resource_name


def is_within(root: Path, target: Path) -> bool:
    """True if `target`, once normalized, stays strictly below `root`."""
    root_abs = Path(os.path.abspath(root))
    target_abs = Path(os.path.abspath(target))
    return target_abs != root_abs and target_abs.is_relative_to(root_abs)
