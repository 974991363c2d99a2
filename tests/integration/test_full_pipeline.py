"""Integration tests — full definitions assembled end to end.

Covers the canonical three-stage pipeline, every generic schedule inside
one assembled plan, the bundled example and plan determinism.
"""

from __future__ import annotations

import pytest

from pipeforge.config import AssemblySettings
from pipeforge.core.assembler import PipelineAssembler
from pipeforge.core.artifact_graph import ArtifactGraph
from pipeforge.core.pipeline import PipelineDefinition
from pipeforge.demo import build_example_pipeline
from pipeforge.models.actions import ActionCategory
from pipeforge.models.targets import BuildProject, StackTarget
from pipeforge.segments import (
    CodeStarSourceSegment,
    SegmentGroup,
    SelfUpdateSegment,
    StackSegment,
)


def _definition(*, name: str = "Delivery") -> PipelineDefinition:
    """Source S1 -> self-update S1 => S2 -> stack (build) consuming S2."""
    graph = ArtifactGraph()
    s1 = graph.artifact("S1")
    s2 = graph.artifact("S2")
    project = BuildProject(build_spec={"phases": {"build": {"commands": ["make synth"]}}})
    return PipelineDefinition(
        name,
        [
            CodeStarSourceSegment(
                output=s1,
                connection_arn="arn:aws:codeconnections:eu-central-1:111111111111:connection/x",
                owner="acme",
                repository="delivery",
            ),
            SelfUpdateSegment(input=s1, output=s2, project=project),
            StackSegment(stack=StackTarget(stack_name="Service"), input=s2, project=project),
        ],
        account="111111111111",
        region="eu-central-1",
        settings=AssemblySettings(),
    )


class TestEndToEnd:
    def test_three_stages(self):
        pipeline = _definition().assemble().unwrap()
        assert pipeline.stage_names == ["Source", "Pipeline", "Service"]
        assert [len(stage.actions) for stage in pipeline.stages] == [1, 1, 4]

    def test_artifacts_flow_between_stages(self):
        pipeline = _definition().assemble().unwrap()
        fetch = pipeline.stage("Source").actions[0]
        mutate = pipeline.stage("Pipeline").action("SelfMutate")
        build = pipeline.stage("Service").action("Build")
        prepare = pipeline.stage("Service").action("PrepareChanges")
        assert fetch.output_artifacts == ["S1"]
        assert mutate.input_artifacts == ["S1"] and mutate.output_artifacts == ["S2"]
        assert build.input_artifacts == ["S2"]
        assert build.output_artifacts == ["Service_Build"]
        assert prepare.configuration["TemplatePath"] == "Service_Build::cdk.out/Service.template.json"

    def test_categories_per_stage(self):
        pipeline = _definition().assemble().unwrap()
        assert [a.category for a in pipeline.stage("Service").actions] == [
            ActionCategory.BUILD,
            ActionCategory.BUILD,
            ActionCategory.DEPLOY,
            ActionCategory.DEPLOY,
        ]

    def test_publish_assets_scoped_to_pipeline_account(self):
        pipeline = _definition().assemble().unwrap()
        publish = pipeline.stage("Service").action("PublishAssets")
        assert publish.configuration["RolePolicy"]["Resource"] == ["arn:*:iam::111111111111:role/*"]


class TestScheduleMatrix:
    @pytest.mark.parametrize(
        ("build", "approval", "expected"),
        [
            (False, False, [("PrepareChanges", 1), ("ExecuteChanges", 2)]),
            (True, False, [("Build", 1), ("PublishAssets", 2), ("PrepareChanges", 3), ("ExecuteChanges", 4)]),
            (False, True, [("PrepareChanges", 1), ("ApproveChanges", 2), ("ExecuteChanges", 3)]),
            (
                True,
                True,
                [
                    ("Build", 1),
                    ("PublishAssets", 2),
                    ("PrepareChanges", 3),
                    ("ApproveChanges", 4),
                    ("ExecuteChanges", 5),
                ],
            ),
        ],
    )
    def test_schedule_in_assembled_plan(
        self, build, approval, expected, graph, context, make_source, make_self_update, make_stack
    ):
        source = graph.artifact("Source")
        stack = make_stack(source, "Target", build=build, approval=approval)
        result = PipelineAssembler(context).assemble(
            [make_source(source), make_self_update(source), stack]
        )
        actions = result.unwrap().stage("Target").actions
        assert [(a.action_name, a.run_order) for a in actions] == expected


class TestRepeatedStack:
    """One stack deployed to two environments from named groups."""

    def test_each_deployment_reads_its_own_build(
        self, graph, context, build_project, make_source, make_self_update
    ):
        source = graph.artifact("Source")
        staging, prod = (
            StackSegment(
                stack=StackTarget(stack_name="App"),
                input=source,
                project=build_project,
                account=account,
            )
            for account in ("222222222222", "333333333333")
        )
        pipeline = PipelineAssembler(context).assemble(
            [
                make_source(source),
                make_self_update(source),
                SegmentGroup(segments=(staging,), stage_name="Staging"),
                SegmentGroup(segments=(prod,), stage_name="Prod"),
            ]
        ).unwrap()

        build_names = [
            pipeline.stage(stage).action("Build").output_artifacts[0]
            for stage in ("Staging", "Prod")
        ]
        assert build_names == ["App_Build", "App_Build_3"]
        assert pipeline.stage("Prod").action("PrepareChanges").configuration["TemplatePath"] == (
            "App_Build_3::app/cdk.out/App.template.json"
        )
        assert pipeline.stage("Prod").action("PublishAssets").input_artifacts == ["App_Build_3"]


class TestExamplePipeline:
    def test_example_assembles(self):
        pipeline = build_example_pipeline().assemble().unwrap()
        assert pipeline.pipeline_name == "ExamplePipeline"
        assert pipeline.stage_names == ["Source", "Pipeline", "TestStack1", "TestStack2"]
        assert [len(stage.actions) for stage in pipeline.stages] == [1, 1, 2, 2]

    def test_example_reads_templates_from_synthesized_app(self):
        pipeline = build_example_pipeline().assemble().unwrap()
        prepare = pipeline.stage("TestStack1").action("PrepareChanges")
        assert prepare.configuration["TemplatePath"] == (
            "PipelineBuild::example/cdk.out/TestStack1.template.json"
        )

    def test_example_self_mutate_keeps_user_phases(self):
        pipeline = build_example_pipeline().assemble().unwrap()
        spec = pipeline.stage("Pipeline").action("SelfMutate").configuration["BuildSpec"]
        assert spec["phases"]["install"]["commands"] == ["npm ci"]
        assert spec["phases"]["build"]["commands"] == ["npm run build"]
        assert spec["cache"] == {"paths": ["/root/.npm/**/*"]}
        assert spec["artifacts"] == {"files": ["example/cdk.out/**/*"]}


class TestDeterminism:
    def test_identical_definitions_identical_plans(self):
        first = _definition().assemble().unwrap()
        second = _definition().assemble().unwrap()
        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_identical_definitions_identical_fingerprints(self):
        assert (
            build_example_pipeline().assemble().unwrap().fingerprint()
            == build_example_pipeline().assemble().unwrap().fingerprint()
        )

    def test_fingerprint_tracks_definition(self):
        assert (
            _definition(name="A").assemble().unwrap().fingerprint()
            != _definition(name="B").assemble().unwrap().fingerprint()
        )
