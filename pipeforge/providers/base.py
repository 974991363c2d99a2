"""Provider protocols — the capability interfaces segments expand through.

Segments never build provider-specific parameters themselves.  They decide
*which* actions exist and in *what order*, and ask a provider for each
concrete action.  Any object with matching methods satisfies a protocol;
the bundled AWS CodePipeline implementations live next to this module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import SecretStr

from pipeforge.models.actions import Action
from pipeforge.models.artifacts import ArtifactPath
from pipeforge.models.sources import CodeCommitTrigger, GitHubTrigger, S3Trigger
from pipeforge.models.targets import (
    BuildEnvironmentVariable,
    BuildProject,
    DeploymentTarget,
)

if TYPE_CHECKING:
    from pipeforge.core.artifact_graph import Artifact


@runtime_checkable
class SourceProvider(Protocol):
    """Builds the single "fetch source" action of a source segment."""

    def codestar(
        self,
        *,
        action_name: str,
        output: Artifact,
        connection_arn: str,
        owner: str,
        repository: str,
        branch: str,
        trigger_on_push: bool | None = None,
        variables_namespace: str | None = None,
    ) -> Action: ...

    def github(
        self,
        *,
        action_name: str,
        output: Artifact,
        oauth_token: SecretStr,
        owner: str,
        repository: str,
        branch: str,
        trigger: GitHubTrigger = GitHubTrigger.WEBHOOK,
        variables_namespace: str | None = None,
    ) -> Action: ...

    def codecommit(
        self,
        *,
        action_name: str,
        output: Artifact,
        repository: str,
        branch: str,
        trigger: CodeCommitTrigger = CodeCommitTrigger.EVENTS,
        variables_namespace: str | None = None,
    ) -> Action: ...

    def s3(
        self,
        *,
        action_name: str,
        output: Artifact,
        bucket: str,
        bucket_key: str,
        trigger: S3Trigger = S3Trigger.POLL,
        variables_namespace: str | None = None,
    ) -> Action: ...


@runtime_checkable
class BuildProvider(Protocol):
    """Builds CodeBuild-style actions: build, asset publishing, self-mutation."""

    def build(
        self,
        *,
        action_name: str,
        project: BuildProject,
        project_name: str,
        input: Artifact,
        extra_inputs: list[Artifact],
        outputs: list[Artifact],
        environment_variables: dict[str, BuildEnvironmentVariable],
        build_dir: str,
        run_order: int,
    ) -> Action: ...

    def publish_assets(
        self,
        *,
        action_name: str,
        project_name: str,
        input: Artifact,
        manifest_path: str,
        account: str | None,
        run_order: int,
    ) -> Action: ...

    def self_mutate(
        self,
        *,
        action_name: str,
        project: BuildProject,
        project_name: str,
        input: Artifact,
        extra_inputs: list[Artifact],
        outputs: list[Artifact],
        environment_variables: dict[str, BuildEnvironmentVariable],
        build_dir: str,
        pipeline_name: str,
        run_order: int,
    ) -> Action: ...


@runtime_checkable
class DeploymentProvider(Protocol):
    """Builds the prepare/execute change-set pair for one deployment target."""

    def prepare_change_set(
        self,
        *,
        action_name: str,
        target: DeploymentTarget,
        template_path: ArtifactPath,
        run_order: int,
        admin_permissions: bool = True,
    ) -> Action: ...

    def execute_change_set(
        self,
        *,
        action_name: str,
        target: DeploymentTarget,
        run_order: int,
        output: Artifact | None = None,
        output_file_name: str | None = None,
    ) -> Action: ...


@runtime_checkable
class ApprovalProvider(Protocol):
    """Builds a manual approval gate."""

    def approve(
        self,
        *,
        action_name: str,
        run_order: int,
        additional_information: str | None = None,
    ) -> Action: ...
