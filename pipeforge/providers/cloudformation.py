"""CloudFormation change-set deployment provider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.artifacts import ArtifactPath
from pipeforge.models.targets import DeploymentTarget

if TYPE_CHECKING:
    from pipeforge.core.artifact_graph import Artifact

ADMIN_CAPABILITIES = "CAPABILITY_NAMED_IAM,CAPABILITY_AUTO_EXPAND"


class CloudFormationProvider:
    """Default ``DeploymentProvider``: create-replace then execute a change set.

    Both actions carry the same stack name, change-set name, account and
    region, taken from one ``DeploymentTarget``.
    """

    def prepare_change_set(
        self,
        *,
        action_name: str,
        target: DeploymentTarget,
        template_path: ArtifactPath,
        run_order: int,
        admin_permissions: bool = True,
    ) -> Action:
        configuration: dict[str, Any] = {
            "ActionMode": "CHANGE_SET_REPLACE",
            "StackName": target.stack_name,
            "ChangeSetName": target.change_set_name,
            "TemplatePath": template_path.location,
        }
        if admin_permissions:
            configuration["Capabilities"] = ADMIN_CAPABILITIES
        return Action(
            action_name=action_name,
            run_order=run_order,
            category=ActionCategory.DEPLOY,
            provider="CloudFormation",
            input_artifacts=[template_path.artifact_name],
            configuration=configuration,
            account=target.account,
            region=target.region,
        )

    def execute_change_set(
        self,
        *,
        action_name: str,
        target: DeploymentTarget,
        run_order: int,
        output: Artifact | None = None,
        output_file_name: str | None = None,
    ) -> Action:
        configuration: dict[str, Any] = {
            "ActionMode": "CHANGE_SET_EXECUTE",
            "StackName": target.stack_name,
            "ChangeSetName": target.change_set_name,
        }
        if output is not None and output_file_name:
            configuration["OutputFileName"] = output_file_name
        return Action(
            action_name=action_name,
            run_order=run_order,
            category=ActionCategory.DEPLOY,
            provider="CloudFormation",
            output_artifacts=[output.name] if output is not None else [],
            configuration=configuration,
            account=target.account,
            region=target.region,
        )
