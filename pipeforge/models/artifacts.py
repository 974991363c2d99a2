"""Artifact graph value models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class EdgeRole(str, Enum):
    """How a segment is bound to an artifact."""

    PRODUCER = "producer"
    CONSUMER = "consumer"


class ArtifactEdge(BaseModel):
    """A single producer or consumer binding in the artifact graph."""

    model_config = ConfigDict(frozen=True)

    artifact_id: str
    segment_id: str
    role: EdgeRole


class ArtifactPath(BaseModel):
    """A file inside an artifact, e.g. a CloudFormation template.

    Rendered as ``ArtifactName::path/to/file`` in action configuration.
    """

    model_config = ConfigDict(frozen=True)

    artifact_name: str
    file_name: str

    @property
    def location(self) -> str:
        return f"{self.artifact_name}::{self.file_name}"
