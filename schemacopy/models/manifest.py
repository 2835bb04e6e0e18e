from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from schemacopy.models.artifact import Artifact

METADATA_ONLY_PACKAGING = frozenset({'pom'})


class ResolutionManifest(BaseModel):
    """
    Everything the external resolver knows about one project.

    `artifacts` is the resolved dependency set used for attribution and
    `classpath` the ordered closure that gets scanned. When no classpath is
    given, the artifact files are scanned in declaration order.
    """
    group_id: str | None = Field(alias='groupId', default=None)
    artifact_id: str | None = Field(alias='artifactId', default=None)
    packaging: str = 'jar'
    artifacts: list[Artifact] = Field(default_factory=list)
    classpath: list[str] | None = None
    extra_roots: list[str] = Field(alias='extraRoots', default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
    )

    @property
    def is_metadata_only(self) -> bool:
        return self.packaging in METADATA_ONLY_PACKAGING

    def classpath_elements(self) -> list[str]:
        if self.classpath is not None:
            return list(self.classpath)
        return [str(a.file) for a in self.artifacts if a.file is not None]
