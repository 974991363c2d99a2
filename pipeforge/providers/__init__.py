"""Action providers — protocols plus the bundled AWS CodePipeline defaults.

``Providers`` bundles one implementation per capability and travels on the
``PipelineContext`` so that every segment expands through the same set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pipeforge.providers.approval import ManualApprovalProvider
from pipeforge.providers.base import (
    ApprovalProvider,
    BuildProvider,
    DeploymentProvider,
    SourceProvider,
)
from pipeforge.providers.cloudformation import CloudFormationProvider
from pipeforge.providers.codebuild import CodeBuildProvider, merge_build_specs
from pipeforge.providers.sources import CodePipelineSourceProvider

if TYPE_CHECKING:
    from pipeforge.config import AssemblySettings


class Providers:
    """One provider per capability; missing ones fall back to the AWS defaults."""

    def __init__(
        self,
        *,
        source: SourceProvider | None = None,
        build: BuildProvider | None = None,
        deployment: DeploymentProvider | None = None,
        approval: ApprovalProvider | None = None,
    ) -> None:
        self.source: SourceProvider = source or CodePipelineSourceProvider()
        self.build: BuildProvider = build or CodeBuildProvider()
        self.deployment: DeploymentProvider = deployment or CloudFormationProvider()
        self.approval: ApprovalProvider = approval or ManualApprovalProvider()

    @classmethod
    def from_settings(cls, settings: AssemblySettings) -> Providers:
        """Default providers configured from assembly settings."""
        return cls(
            build=CodeBuildProvider(
                build_image=settings.build_image,
                compute_type=settings.compute_type,
                publish_assets_package=settings.publish_assets_package,
            )
        )

    def __repr__(self) -> str:
        return (
            f"<Providers source={type(self.source).__name__} "
            f"build={type(self.build).__name__} "
            f"deployment={type(self.deployment).__name__} "
            f"approval={type(self.approval).__name__}>"
        )


__all__ = [
    "ApprovalProvider",
    "BuildProvider",
    "DeploymentProvider",
    "SourceProvider",
    "CodePipelineSourceProvider",
    "CodeBuildProvider",
    "CloudFormationProvider",
    "ManualApprovalProvider",
    "Providers",
    "merge_build_specs",
]
