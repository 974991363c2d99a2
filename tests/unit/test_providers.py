"""Tests for the bundled providers and the provider protocols."""

from __future__ import annotations

from pipeforge.config import AssemblySettings
from pipeforge.core.artifact_graph import ArtifactGraph
from pipeforge.models.actions import Action, ActionCategory
from pipeforge.models.targets import BuildProject, DeploymentTarget
from pipeforge.providers import (
    ApprovalProvider,
    BuildProvider,
    CloudFormationProvider,
    CodeBuildProvider,
    CodePipelineSourceProvider,
    DeploymentProvider,
    ManualApprovalProvider,
    Providers,
    SourceProvider,
    merge_build_specs,
)


class TestMergeBuildSpecs:
    def test_nested_mappings_merge(self):
        merged = merge_build_specs(
            {"phases": {"install": {"commands": ["npm ci"]}}},
            {"phases": {"build": {"commands": ["npm run build"]}}},
        )
        assert merged == {
            "phases": {
                "install": {"commands": ["npm ci"]},
                "build": {"commands": ["npm run build"]},
            }
        }

    def test_lists_concatenate(self):
        merged = merge_build_specs(
            {"artifacts": {"files": ["a/**/*"]}},
            {"artifacts": {"files": ["b/**/*"]}},
        )
        assert merged["artifacts"]["files"] == ["a/**/*", "b/**/*"]

    def test_string_joins_list(self):
        merged = merge_build_specs({"commands": "npm ci"}, {"commands": ["npm test"]})
        assert merged["commands"] == ["npm ci", "npm test"]

    def test_scalars_overridden(self):
        assert merge_build_specs({"version": "0.1"}, {"version": "0.2"}) == {"version": "0.2"}

    def test_inputs_not_mutated(self):
        base = {"phases": {"build": {"commands": ["a"]}}}
        merge_build_specs(base, {"phases": {"build": {"commands": ["b"]}}})
        assert base == {"phases": {"build": {"commands": ["a"]}}}


class TestCodeBuildProvider:
    def test_build_action(self):
        graph = ArtifactGraph()
        source, out = graph.artifact("Source"), graph.artifact("Out")
        action = CodeBuildProvider().build(
            action_name="Build",
            project=BuildProject(build_spec={"version": "0.2"}, privileged=True),
            project_name="StackBuild",
            input=source,
            extra_inputs=[],
            outputs=[out],
            environment_variables={},
            build_dir="cdk.out",
            run_order=1,
        )
        assert action.provider == "CodeBuild"
        assert action.category is ActionCategory.BUILD
        assert action.output_artifacts == ["Out"]
        assert action.configuration["PrivilegedMode"] is True
        assert action.configuration["BuildSpec"] == {
            "version": "0.2",
            "artifacts": {"files": ["cdk.out/**/*"]},
        }
        assert "PrimarySource" not in action.configuration
        assert "EnvironmentVariables" not in action.configuration

    def test_project_overrides_image(self):
        graph = ArtifactGraph()
        action = CodeBuildProvider(build_image="default:1").build(
            action_name="Build",
            project=BuildProject(build_image="custom:2", compute_type="BUILD_GENERAL1_LARGE"),
            project_name="P",
            input=graph.artifact(),
            extra_inputs=[],
            outputs=[],
            environment_variables={},
            build_dir=".",
            run_order=1,
        )
        assert action.configuration["BuildImage"] == "custom:2"
        assert action.configuration["ComputeType"] == "BUILD_GENERAL1_LARGE"

    def test_publish_assets(self):
        graph = ArtifactGraph()
        action = CodeBuildProvider().publish_assets(
            action_name="PublishAssets",
            project_name="StackPublishAssets",
            input=graph.artifact("Build"),
            manifest_path="app/./cdk.out/",
            account="111111111111",
            run_order=2,
        )
        phases = action.configuration["BuildSpec"]["phases"]
        assert phases["install"]["commands"] == ["npm i -g npm@latest @flit/publish-cdk-assets@latest"]
        assert phases["build"]["commands"] == ["pca app/cdk.out"]
        policy = action.configuration["RolePolicy"]
        assert policy["Action"] == ["sts:AssumeRole"]
        assert policy["Resource"] == ["arn:*:iam::111111111111:role/*"]
        tags = policy["Condition"]["ForAnyValue:StringEquals"]["iam:ResourceTag/aws-cdk:bootstrap-role"]
        assert tags == ["image-publishing", "file-publishing", "deploy"]

    def test_publish_assets_any_account(self):
        action = CodeBuildProvider().publish_assets(
            action_name="PublishAssets",
            project_name="P",
            input=ArtifactGraph().artifact(),
            manifest_path="cdk.out",
            account=None,
            run_order=2,
        )
        assert action.configuration["RolePolicy"]["Resource"] == ["arn:*:iam::*:role/*"]


class TestDeploymentAndApproval:
    target = DeploymentTarget(stack_name="S", change_set_name="SChanges", region="eu-central-1")

    def test_prepare_without_admin(self):
        action = CloudFormationProvider().prepare_change_set(
            action_name="PrepareChanges",
            target=self.target,
            template_path=ArtifactGraph().artifact("B").at_path("t.json"),
            run_order=1,
            admin_permissions=False,
        )
        assert "Capabilities" not in action.configuration
        assert action.configuration["TemplatePath"] == "B::t.json"
        assert action.region == "eu-central-1"

    def test_approval_with_topic(self):
        action = ManualApprovalProvider("arn:aws:sns:eu-central-1:1:topic").approve(
            action_name="ApproveChanges", run_order=2, additional_information="check"
        )
        assert action.category is ActionCategory.APPROVAL
        assert action.provider == "Manual"
        assert action.configuration == {
            "CustomData": "check",
            "NotificationArn": "arn:aws:sns:eu-central-1:1:topic",
        }


class TestProviders:
    def test_defaults_satisfy_protocols(self):
        providers = Providers()
        assert isinstance(providers.source, SourceProvider)
        assert isinstance(providers.build, BuildProvider)
        assert isinstance(providers.deployment, DeploymentProvider)
        assert isinstance(providers.approval, ApprovalProvider)
        assert isinstance(providers.source, CodePipelineSourceProvider)

    def test_from_settings(self):
        providers = Providers.from_settings(
            AssemblySettings(build_image="img:9", compute_type="BUILD_GENERAL1_MEDIUM")
        )
        assert providers.build.build_image == "img:9"
        assert providers.build.compute_type == "BUILD_GENERAL1_MEDIUM"

    def test_custom_provider_replaces_default(self):
        class RecordingApproval:
            def approve(self, *, action_name, run_order, additional_information=None):
                return Action(
                    action_name=action_name,
                    run_order=run_order,
                    category=ActionCategory.APPROVAL,
                    provider="Recorder",
                )

        providers = Providers(approval=RecordingApproval())
        assert isinstance(providers.approval, ApprovalProvider)
        assert isinstance(providers.deployment, CloudFormationProvider)
        assert "RecordingApproval" in repr(providers)
