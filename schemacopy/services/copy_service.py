import os
import shutil
import tempfile
import zipfile
from pathlib import Path
from typing import BinaryIO

import structlog

from schemacopy.core.errors import CopyError
from schemacopy.core.layout import is_within

logger = structlog.get_logger('copy')


class CopyService:
    """Writes schema files below a single output root."""

    def __init__(self, output_root: str | Path):
        self.output_root = Path(os.path.abspath(output_root))

    def check_target(self, target: Path, resource_name: str) -> Path:
        target = Path(os.path.abspath(target))
        if not is_within(self.output_root, target):
            raise CopyError(
                f"Refusing to copy {resource_name}: destination {target} "
                f"escapes output directory {self.output_root}",
            )
        return target

    def check_existing_ancestor(self, directory: Path, resource_name: str) -> None:
        """Refuse to create directories below an ancestor that links outside the tree."""
        ancestor = directory
        while not ancestor.exists() and ancestor != self.output_root:
            ancestor = ancestor.parent
        real_root = self.output_root.resolve()
        real_ancestor = ancestor.resolve()
        if real_ancestor != real_root and not is_within(real_root, real_ancestor):
            raise CopyError(
                f"Refusing to copy {resource_name}: {ancestor} links outside "
                f"output directory {self.output_root}",
            )

    def copy(self, source: BinaryIO, target: str | Path, resource_name: str) -> int:
        """
        Replace `target` with the bytes of `source`.

        The bytes go to a temporary sibling first and are renamed into place,
        so readers never see a half-written file and concurrent copies to the
        same destination resolve to whichever finished last.

        Returns:
            Number of bytes written.
        """
        target = self.check_target(Path(target), resource_name)
        tmp_name = None
        try:
            self.check_existing_ancestor(target.parent, resource_name)
            target.parent.mkdir(parents=True, exist_ok=True)
            # symlinked directories must not lead outside the tree either
            real_target = target.parent.resolve() / target.name
            if not is_within(self.output_root.resolve(), real_target):
                raise CopyError(
                    f"Refusing to copy {resource_name}: {target.parent} links "
                    f"outside output directory {self.output_root}",
                )
            with tempfile.NamedTemporaryFile(
                dir=target.parent, prefix=f".{target.name}.", suffix='.tmp',
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                shutil.copyfileobj(source, tmp)
                size = tmp.tell()
            os.replace(tmp_name, target)
            tmp_name = None
        except (OSError, zipfile.BadZipFile) as e:
            raise CopyError(f"Error copying {resource_name} to {target}: {e}") from e
        finally:
            if tmp_name is not None:
                _remove_quietly(tmp_name)

        logger.debug('Copied', resource=resource_name, target=str(target), size=size)
        return size


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
