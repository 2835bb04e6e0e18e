import io

import pytest

from schemacopy.core.errors import CopyError
from schemacopy.services.copy_service import CopyService


@pytest.fixture
def output_root(tmp_path):
    return tmp_path / 'out'


def test_creates_parents_and_writes(output_root):
    service = CopyService(output_root)
    target = output_root / 'com' / 'example' / 'a.proto'

    size = service.copy(io.BytesIO(b'message A {}'), target, 'a.proto')

    assert size == 12
    assert target.read_bytes() == b'message A {}'


def test_overwrites_existing_file(output_root):
    service = CopyService(output_root)
    target = output_root / 'g' / 'a.proto'
    target.parent.mkdir(parents=True)
    target.write_text('stale contents that are longer')

    service.copy(io.BytesIO(b'new'), target, 'a.proto')

    assert target.read_bytes() == b'new'


def test_leaves_no_temp_files(output_root):
    service = CopyService(output_root)
    target = output_root / 'g' / 'a.proto'
    service.copy(io.BytesIO(b'x'), target, 'a.proto')
    assert [p.name for p in target.parent.iterdir()] == ['a.proto']


def test_rejects_path_traversal(output_root, tmp_path):
    service = CopyService(output_root)
    target = output_root / 'g' / 'a' / '..' / '..' / '..' / 'evil.proto'

    with pytest.raises(CopyError, match=r'\.\./\.\./\.\./evil\.proto'):
        service.copy(io.BytesIO(b'x'), target, '../../../evil.proto')

    assert not (tmp_path / 'evil.proto').exists()


def test_rejects_absolute_resource_name(output_root, tmp_path):
    service = CopyService(output_root)
    target = output_root / 'g' / 'a' / str(tmp_path / 'abs.proto')
    with pytest.raises(CopyError, match='escapes output directory'):
        service.copy(io.BytesIO(b'x'), target, str(tmp_path / 'abs.proto'))
    assert not (tmp_path / 'abs.proto').exists()


def test_rejects_symlinked_escape(output_root, tmp_path):
    outside = tmp_path / 'outside'
    outside.mkdir()
    (output_root / 'g').mkdir(parents=True)
    (output_root / 'g' / 'a').symlink_to(outside, target_is_directory=True)
    service = CopyService(output_root)

    with pytest.raises(CopyError, match='links outside'):
        service.copy(io.BytesIO(b'x'), output_root / 'g' / 'a' / 'x.proto', 'x.proto')

    assert list(outside.iterdir()) == []


def test_io_failure_names_resource_and_target(output_root):
    service = CopyService(output_root)
    # A file where a directory is needed
    output_root.mkdir()
    (output_root / 'g').write_text('not a directory')
    target = output_root / 'g' / 'a.proto'

    with pytest.raises(CopyError) as excinfo:
        service.copy(io.BytesIO(b'x'), target, 'a.proto')

    message = str(excinfo.value)
    assert 'a.proto' in message
    assert str(target) in message


def test_failed_stream_removes_temp_file(output_root):
    class Exploding(io.RawIOBase):
        def readable(self):
            return True

        def readinto(self, buffer):
            raise OSError('disk on fire')

    service = CopyService(output_root)
    target = output_root / 'g' / 'a.proto'

    with pytest.raises(CopyError, match='disk on fire'):
        service.copy(Exploding(), target, 'a.proto')

    assert list(target.parent.iterdir()) == []


def test_symlink_above_parent_creates_nothing_outside(output_root, tmp_path):
    outside = tmp_path / 'outside'
    outside.mkdir()
    output_root.mkdir()
    (output_root / 'g').symlink_to(outside, target_is_directory=True)
    service = CopyService(output_root)
    target = output_root / 'g' / 'a' / 'deep' / 'x.proto'

    with pytest.raises(CopyError, match='links outside'):
        service.copy(io.BytesIO(b'x'), target, 'a/deep/x.proto')

    assert list(outside.iterdir()) == []


def test_output_root_may_be_a_symlink(tmp_path):
    real = tmp_path / 'real'
    real.mkdir()
    link = tmp_path / 'link'
    link.symlink_to(real, target_is_directory=True)
    service = CopyService(link)

    service.copy(io.BytesIO(b'x'), link / 'g' / 'a' / 'x.proto', 'x.proto')

    assert (real / 'g' / 'a' / 'x.proto').read_bytes() == b'x'
