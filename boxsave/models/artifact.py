"""
Box identity and server-side version listing models
"""

from dataclasses import dataclass
from typing import List

from pydantic import BaseModel, ConfigDict

@dataclass(frozen=True)
class ArtifactIdentity:
    """A named, provider-specific box image"""
    name: str  # underscore-delimited namespace, e.g. org_name_box
    provider: str  # virtualbox, vmware_fusion, ...

    def __post_init__(self):
        if not self.name:
            raise ValueError("Artifact name must not be empty")


class VersionRecord(BaseModel):
    # some servers emit bare numbers for labels like "2"
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    version: str


class BoxListing(BaseModel):
    """Body of GET <base>/<name>"""
    model_config = ConfigDict(extra="ignore")

    versions: List[VersionRecord]

    def labels(self) -> List[str]:
        return [record.version for record in self.versions]
