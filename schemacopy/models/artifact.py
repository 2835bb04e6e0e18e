from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator


class Artifact(BaseModel):
    """A single resolved build dependency."""
    group_id: str = Field(alias='groupId')
    artifact_id: str = Field(alias='artifactId')
    version: str | None = None
    type: str = 'jar'
    classifier: str | None = None
    scope: str | None = None
    file: Path | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra='ignore',
    )

    @field_validator('group_id', 'artifact_id')
    @classmethod
    def require_coordinate(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('coordinate must not be empty')
        return v

    @field_validator('file', mode='before')
    @classmethod
    def parse_file(cls, v: Any) -> Any:
        # Unresolved optional dependencies come through as empty strings
        if v == '':
            return None
        return v

    @property
    def coordinates(self) -> str:
        parts = [self.group_id, self.artifact_id]
        if self.version:
            parts.append(self.version)
        return ':'.join(parts)

    def __str__(self) -> str:
        return self.coordinates
