"""Configuration management for schemacopy."""
import os
from dataclasses import dataclass
from dataclasses import field
from dataclasses import replace
from pathlib import Path

DEFAULT_SUFFIX = '.proto'
DEFAULT_OUTPUT_SUBDIR = Path('generated-resources') / 'dependency-protobufs'

_TRUTHY = {'1', 'true', 'yes', 'on'}


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


@dataclass
class PathConfig:
    """Build directory layout."""
    build_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv('SCHEMACOPY_BUILD_DIR', 'target'),
        ),
    )
    output_override: Path | None = field(
        default_factory=lambda: _env_path('SCHEMACOPY_OUTPUT_DIR'),
    )

    @property
    def output_dir(self) -> Path:
        """Root of the materialized schema tree."""
        if self.output_override is not None:
            return self.output_override
        return self.build_dir / DEFAULT_OUTPUT_SUBDIR


@dataclass
class SchemaCopyConfig:
    paths: PathConfig = field(default_factory=PathConfig)
    skip: bool = field(
        default_factory=lambda: _env_flag('SCHEMACOPY_SKIP'),
    )
    suffix: str = field(
        default_factory=lambda: os.getenv('SCHEMACOPY_SUFFIX', DEFAULT_SUFFIX),
    )
    workers: int = field(
        default_factory=lambda: int(os.getenv('SCHEMACOPY_WORKERS', '4')),
    )
    extra_roots: list[str] = field(default_factory=list)

    @property
    def output_dir(self) -> Path:
        return self.paths.output_dir

    def __post_init__(self):
        if self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if not self.suffix:
            raise ValueError('suffix must not be empty')

    @classmethod
    def load(
        cls,
        output_dir: Path | None = None,
        skip: bool | None = None,
        suffix: str | None = None,
        workers: int | None = None,
        extra_roots: list[str] | None = None,
    ) -> 'SchemaCopyConfig':
        """
        Build a config from the environment, then apply explicit overrides.

        Any argument left as None keeps the environment (or default) value.
        """
        config = cls()
        if output_dir is not None:
            config.paths = replace(config.paths, output_override=output_dir)
        if skip is not None:
            config.skip = skip
        if suffix is not None:
            config.suffix = suffix
        if extra_roots:
            config.extra_roots = list(extra_roots)
        if workers is not None:
            config = replace(config, workers=workers)
        return config
