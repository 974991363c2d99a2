"""Source connector provider for CodePipeline source actions.

Every source action runs first in its stage (run order 1) and writes its
single output artifact.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import SecretStr

from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.sources import CodeCommitTrigger, GitHubTrigger, S3Trigger

if TYPE_CHECKING:
    from pipeforge.core.artifact_graph import Artifact


class CodePipelineSourceProvider:
    """Default ``SourceProvider`` for CodeStar, GitHub, CodeCommit and S3."""

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
    ) -> Action:
        configuration: dict[str, Any] = {
            "ConnectionArn": connection_arn,
            "FullRepositoryId": f"{owner}/{repository}",
            "BranchName": branch,
        }
        if trigger_on_push is not None:
            configuration["DetectChanges"] = trigger_on_push
        return self._source_action(
            action_name, "CodeStarSourceConnection", output, configuration, variables_namespace
        )

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
    ) -> Action:
        # Pass a dynamic reference ("{{resolve:secretsmanager:...}}"), not a
        # literal token: the value is written into the plan as is.
        configuration: dict[str, Any] = {
            "Owner": owner,
            "Repo": repository,
            "Branch": branch,
            "OAuthToken": oauth_token.get_secret_value(),
            "PollForSourceChanges": trigger == GitHubTrigger.POLL,
        }
        action = self._source_action(
            action_name, "GitHub", output, configuration, variables_namespace
        )
        return action.model_copy(update={"owner": "ThirdParty"})

    def codecommit(
        self,
        *,
        action_name: str,
        output: Artifact,
        repository: str,
        branch: str,
        trigger: CodeCommitTrigger = CodeCommitTrigger.EVENTS,
        variables_namespace: str | None = None,
    ) -> Action:
        configuration: dict[str, Any] = {
            "RepositoryName": repository,
            "BranchName": branch,
            "PollForSourceChanges": trigger == CodeCommitTrigger.POLL,
        }
        return self._source_action(
            action_name, "CodeCommit", output, configuration, variables_namespace
        )

    def s3(
        self,
        *,
        action_name: str,
        output: Artifact,
        bucket: str,
        bucket_key: str,
        trigger: S3Trigger = S3Trigger.POLL,
        variables_namespace: str | None = None,
    ) -> Action:
        configuration: dict[str, Any] = {
            "S3Bucket": bucket,
            "S3ObjectKey": bucket_key,
            "PollForSourceChanges": trigger == S3Trigger.POLL,
        }
        return self._source_action(
            action_name, "S3", output, configuration, variables_namespace
        )

    @staticmethod
    def _source_action(
        action_name: str,
        provider: str,
        output: Artifact,
        configuration: dict[str, Any],
        variables_namespace: str | None,
    ) -> Action:
        return Action(
            action_name=action_name,
            run_order=1,
            category=ActionCategory.SOURCE,
            provider=provider,
            output_artifacts=[output.name],
            configuration=configuration,
            namespace=variables_namespace,
        )
