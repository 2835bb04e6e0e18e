import zipfile

import pytest


@pytest.fixture
def make_jar(tmp_path):
    """Build a zip archive under tmp_path from a {entry name: content} mapping."""
    def _make(name: str, entries: dict[str, bytes | str]):
        path = tmp_path / 'repo' / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, 'w') as archive:
            for entry, content in entries.items():
                if isinstance(content, str):
                    content = content.encode()
                archive.writestr(entry, content)
        return path
    return _make


@pytest.fixture
def make_dir(tmp_path):
    """Build a plain directory tree under tmp_path."""
    def _make(name: str, entries: dict[str, str]):
        root = tmp_path / name
        for entry, content in entries.items():
            file = root / entry
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_text(content)
        root.mkdir(parents=True, exist_ok=True)
        return root
    return _make
