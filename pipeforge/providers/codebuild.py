"""CodeBuild-backed build provider.

Produces three kinds of CodeBuild actions:

* **Build** — runs the caller's buildspec and exports the synthesized app
  (``<build_dir>/**/*``) as the build output artifact.
* **PublishAssets** — runs ``pca`` from ``@flit/publish-cdk-assets`` against
  the asset manifests in the build directory, with a role allowed to assume
  the CDK bootstrap publishing and deploy roles.
* **SelfMutate** — rebuilds the app and redeploys the pipeline stack itself.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING, Any

from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.targets import BuildEnvironmentVariable, BuildProject

if TYPE_CHECKING:
    from pipeforge.core.artifact_graph import Artifact

# CDK bootstrap roles the asset publishing job may assume.
BOOTSTRAP_ROLE_TAGS: list[str] = ["image-publishing", "file-publishing", "deploy"]


def merge_build_specs(base: dict[str, Any], extra: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge two buildspec mappings without mutating either.

    Nested mappings merge recursively, lists concatenate (``base`` first),
    and for any other value ``extra`` wins.  A bare command string is
    treated as a one-item list when merged with a list.
    """
    merged: dict[str, Any] = dict(base)
    for key, value in extra.items():
        if key not in merged:
            merged[key] = value
            continue
        current = merged[key]
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_build_specs(current, value)
        elif isinstance(current, (list, str)) and isinstance(value, (list, str)) and (
            isinstance(current, list) or isinstance(value, list)
        ):
            merged[key] = _as_list(current) + _as_list(value)
        else:
            merged[key] = value
    return merged


def _as_list(value: list[Any] | str) -> list[Any]:
    return list(value) if isinstance(value, list) else [value]


def app_artifact_spec(build_dir: str) -> dict[str, Any]:
    """Buildspec fragment exporting the synthesized app directory."""
    return {"artifacts": {"files": [posixpath.join(build_dir, "**/*")]}}


def environment_variables_config(
    variables: dict[str, BuildEnvironmentVariable],
) -> list[dict[str, str]]:
    """Render environment variables in CodePipeline's name/value/type form."""
    return [
        {"name": name, "value": variable.value, "type": variable.type.value}
        for name, variable in variables.items()
    ]


class CodeBuildProvider:
    """Default ``BuildProvider`` targeting AWS CodeBuild.

    Parameters
    ----------
    build_image:
        Image used when a ``BuildProject`` does not name one.
    compute_type:
        Compute type used when a ``BuildProject`` does not name one.
    publish_assets_package:
        npm package spec that provides the ``pca`` publisher.
    """

    def __init__(
        self,
        *,
        build_image: str = "aws/codebuild/amazonlinux2-x86_64-standard:5.0",
        compute_type: str = "BUILD_GENERAL1_SMALL",
        publish_assets_package: str = "@flit/publish-cdk-assets@latest",
    ) -> None:
        self.build_image = build_image
        self.compute_type = compute_type
        self.publish_assets_package = publish_assets_package

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

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
    ) -> Action:
        build_spec = merge_build_specs(project.build_spec or {}, app_artifact_spec(build_dir))
        return self._codebuild_action(
            action_name=action_name,
            project=project,
            project_name=project_name,
            build_spec=build_spec,
            input=input,
            extra_inputs=extra_inputs,
            outputs=outputs,
            environment_variables=environment_variables,
            run_order=run_order,
        )

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
    ) -> Action:
        build_spec = merge_build_specs(project.build_spec or {}, app_artifact_spec(build_dir))
        build_spec = merge_build_specs(
            build_spec,
            {
                "phases": {
                    # post_build also runs after a failed build phase
                    "post_build": {
                        "commands": [
                            '[ "$CODEBUILD_BUILD_SUCCEEDING" = 1 ] && '
                            f"npx cdk --app {build_dir} deploy {pipeline_name} "
                            "--require-approval=never"
                        ]
                    }
                }
            },
        )
        return self._codebuild_action(
            action_name=action_name,
            project=project,
            project_name=project_name,
            build_spec=build_spec,
            input=input,
            extra_inputs=extra_inputs,
            outputs=outputs,
            environment_variables=environment_variables,
            run_order=run_order,
        )

    # ------------------------------------------------------------------
    # Asset publishing
    # ------------------------------------------------------------------

    def publish_assets(
        self,
        *,
        action_name: str,
        project_name: str,
        input: Artifact,
        manifest_path: str,
        account: str | None,
        run_order: int,
    ) -> Action:
        manifest = posixpath.normpath(manifest_path) if manifest_path else "."
        build_spec = {
            "version": "0.2",
            "phases": {
                "install": {
                    "runtime-versions": {"nodejs": "latest"},
                    "commands": [f"npm i -g npm@latest {self.publish_assets_package}"],
                },
                "build": {"commands": [f"pca {manifest}"]},
            },
        }
        role_policy = {
            "Effect": "Allow",
            "Action": ["sts:AssumeRole"],
            "Resource": [f"arn:*:iam::{account or '*'}:role/*"],
            "Condition": {
                "ForAnyValue:StringEquals": {
                    "iam:ResourceTag/aws-cdk:bootstrap-role": list(BOOTSTRAP_ROLE_TAGS),
                }
            },
        }
        return Action(
            action_name=action_name,
            run_order=run_order,
            category=ActionCategory.BUILD,
            provider="CodeBuild",
            input_artifacts=[input.name],
            configuration={
                "ProjectName": project_name,
                "BuildSpec": build_spec,
                "BuildImage": self.build_image,
                "ComputeType": self.compute_type,
                "RolePolicy": role_policy,
            },
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _codebuild_action(
        self,
        *,
        action_name: str,
        project: BuildProject,
        project_name: str,
        build_spec: dict[str, Any],
        input: Artifact,
        extra_inputs: list[Artifact],
        outputs: list[Artifact],
        environment_variables: dict[str, BuildEnvironmentVariable],
        run_order: int,
    ) -> Action:
        configuration: dict[str, Any] = {
            "ProjectName": project_name,
            "BuildSpec": build_spec,
            "BuildImage": project.build_image or self.build_image,
            "ComputeType": project.compute_type or self.compute_type,
            "PrivilegedMode": project.privileged,
        }
        if extra_inputs:
            configuration["PrimarySource"] = input.name
        if environment_variables:
            configuration["EnvironmentVariables"] = environment_variables_config(
                environment_variables
            )
        if project.role_arn:
            configuration["RoleArn"] = project.role_arn

        return Action(
            action_name=action_name,
            run_order=run_order,
            category=ActionCategory.BUILD,
            provider="CodeBuild",
            input_artifacts=[input.name, *(a.name for a in extra_inputs)],
            output_artifacts=[a.name for a in outputs],
            configuration=configuration,
        )
