from schemacopy.models.root import ArchiveRoot
from schemacopy.models.root import DirectoryRoot
from schemacopy.models.root import RootKind
from schemacopy.services.locator_service import extra_roots
from schemacopy.services.locator_service import locate
from schemacopy.services.locator_service import present_files
from schemacopy.services.locator_service import to_roots


class TestPresentFiles:
    def test_drops_missing_entries(self, make_jar, tmp_path):
        jar = make_jar('a.jar', {'a.proto': 'x'})
        result = present_files([str(tmp_path / 'missing.jar'), str(jar)])
        assert result == [jar]

    def test_drops_directories(self, make_jar, make_dir):
        jar = make_jar('a.jar', {})
        classes = make_dir('classes', {'a.proto': 'x'})
        assert present_files([str(classes), str(jar)]) == [jar]

    def test_keeps_order(self, make_jar):
        b = make_jar('b.jar', {})
        a = make_jar('a.jar', {})
        assert present_files([str(b), str(a)]) == [b, a]

    def test_empty(self):
        assert present_files([]) == []


class TestToRoots:
    def test_roots_are_archives(self, make_jar):
        jar = make_jar('a.jar', {})
        roots = to_roots([str(jar)])
        assert roots == [ArchiveRoot(jar)]
        assert roots[0].kind is RootKind.ARCHIVE

    def test_duplicates_collapse(self, make_jar):
        jar = make_jar('a.jar', {})
        aliased = jar.parent / '.' / jar.name
        assert len(to_roots([str(jar), str(aliased), str(jar)])) == 1

    def test_symlink_to_same_archive_collapses(self, make_jar):
        jar = make_jar('a.jar', {})
        link = jar.parent / 'link.jar'
        link.symlink_to(jar)
        roots = to_roots([str(jar), str(link)])
        assert roots == [ArchiveRoot(jar)]


class TestExtraRoots:
    def test_directories_are_kept(self, make_dir, tmp_path):
        classes = make_dir('classes', {})
        roots = extra_roots([str(classes), str(tmp_path / 'nope')])
        assert roots == [DirectoryRoot(classes)]

    def test_locate_puts_classpath_first(self, make_jar, make_dir):
        jar = make_jar('a.jar', {})
        classes = make_dir('classes', {})
        roots = locate([str(jar)], [str(classes), str(jar)])
        assert roots == [ArchiveRoot(jar), DirectoryRoot(classes)]
