"""Pipeforge data models — all Pydantic v2, all frozen (immutable)."""

from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.artifacts import ArtifactEdge, ArtifactPath, EdgeRole
from pipeforge.models.pipeline import (
    AssembledPipeline,
    AssembledStage,
    AssemblyResult,
    ConstructedSegment,
)
from pipeforge.models.sources import CodeCommitTrigger, GitHubTrigger, S3Trigger
from pipeforge.models.targets import (
    BuildEnvironmentVariable,
    BuildEnvironmentVariableType,
    BuildProject,
    DeploymentTarget,
    StackTarget,
)

__all__ = [
    # actions
    "Action",
    "ActionCategory",
    # artifacts
    "ArtifactEdge",
    "ArtifactPath",
    "EdgeRole",
    # pipeline
    "AssembledPipeline",
    "AssembledStage",
    "AssemblyResult",
    "ConstructedSegment",
    # sources
    "CodeCommitTrigger",
    "GitHubTrigger",
    "S3Trigger",
    # targets
    "BuildEnvironmentVariable",
    "BuildEnvironmentVariableType",
    "BuildProject",
    "DeploymentTarget",
    "StackTarget",
]
