from pathlib import Path

import pytest

from schemacopy.core.config import PathConfig
from schemacopy.core.config import SchemaCopyConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        'SCHEMACOPY_BUILD_DIR', 'SCHEMACOPY_OUTPUT_DIR', 'SCHEMACOPY_SKIP',
        'SCHEMACOPY_SUFFIX', 'SCHEMACOPY_WORKERS',
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = SchemaCopyConfig()
    assert config.output_dir == Path('target/generated-resources/dependency-protobufs')
    assert config.skip is False
    assert config.suffix == '.proto'
    assert config.workers == 4
    assert config.extra_roots == []


def test_build_dir_from_env(monkeypatch):
    monkeypatch.setenv('SCHEMACOPY_BUILD_DIR', 'build')
    assert PathConfig().output_dir == Path('build/generated-resources/dependency-protobufs')


def test_output_dir_from_env(monkeypatch):
    monkeypatch.setenv('SCHEMACOPY_OUTPUT_DIR', '/tmp/protos')
    assert SchemaCopyConfig().output_dir == Path('/tmp/protos')


@pytest.mark.parametrize('value', ['1', 'true', 'TRUE', 'yes', 'on'])
def test_skip_from_env(monkeypatch, value):
    monkeypatch.setenv('SCHEMACOPY_SKIP', value)
    assert SchemaCopyConfig().skip is True


def test_skip_false_from_env(monkeypatch):
    monkeypatch.setenv('SCHEMACOPY_SKIP', 'false')
    assert SchemaCopyConfig().skip is False


def test_load_overrides_env(monkeypatch, tmp_path):
    monkeypatch.setenv('SCHEMACOPY_SUFFIX', '.thrift')
    monkeypatch.setenv('SCHEMACOPY_WORKERS', '8')

    config = SchemaCopyConfig.load(
        output_dir=tmp_path, suffix='.avsc', workers=2, extra_roots=['classes'],
    )

    assert config.output_dir == tmp_path
    assert config.suffix == '.avsc'
    assert config.workers == 2
    assert config.extra_roots == ['classes']


def test_load_keeps_env_when_not_overridden(monkeypatch):
    monkeypatch.setenv('SCHEMACOPY_SUFFIX', '.thrift')
    monkeypatch.setenv('SCHEMACOPY_SKIP', 'true')
    config = SchemaCopyConfig.load()
    assert config.suffix == '.thrift'
    assert config.skip is True


def test_invalid_workers():
    with pytest.raises(ValueError, match='workers'):
        SchemaCopyConfig.load(workers=0)


def test_empty_suffix():
    with pytest.raises(ValueError, match='suffix'):
        SchemaCopyConfig(suffix='')
