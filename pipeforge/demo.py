"""Bundled example pipeline used by ``pipeforge demo`` and the smoke script.

One CodeStar source, the self-update segment building the CDK app with
``npm ci && npm run build``, and two stacks deployed straight from the
synthesized app.
"""

from __future__ import annotations

from pipeforge.config import AssemblySettings
from pipeforge.core.artifact_graph import ArtifactGraph
from pipeforge.core.pipeline import PipelineDefinition
from pipeforge.models.targets import BuildProject, StackTarget
from pipeforge.segments import CodeStarSourceSegment, SelfUpdateSegment, StackSegment

EXAMPLE_CONNECTION_ARN = (
    "arn:aws:codeconnections:eu-central-1:123456789012:connection/example"
)

EXAMPLE_BUILD_SPEC = {
    "version": "0.2",
    "phases": {
        "install": {
            "runtime-versions": {"nodejs": "latest"},
            "commands": ["npm ci"],
        },
        "build": {"commands": ["npm run build"]},
    },
    "cache": {"paths": ["/root/.npm/**/*"]},
}


def build_example_pipeline(
    *,
    account: str | None = None,
    region: str | None = None,
    settings: AssemblySettings | None = None,
) -> PipelineDefinition:
    """Declare the example pipeline on a fresh artifact graph."""
    graph = ArtifactGraph()
    source = graph.artifact("Source")
    pipeline_build = graph.artifact("PipelineBuild")

    return PipelineDefinition(
        "ExamplePipeline",
        [
            CodeStarSourceSegment(
                output=source,
                connection_arn=EXAMPLE_CONNECTION_ARN,
                owner="vierroth",
                repository="cdk-pipeline",
                branch="main",
            ),
            SelfUpdateSegment(
                input=source,
                output=pipeline_build,
                project=BuildProject(build_spec=EXAMPLE_BUILD_SPEC),
            ),
            StackSegment(
                stack=StackTarget(stack_name="TestStack1", account=account, region=region),
                input=pipeline_build,
            ),
            StackSegment(
                stack=StackTarget(stack_name="TestStack2", account=account, region=region),
                input=pipeline_build,
            ),
        ],
        root_dir="example/",
        account=account,
        region=region,
        settings=settings,
    )
