"""Shared test fixtures for Pipeforge."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from pipeforge.core.artifact_graph import Artifact, ArtifactGraph
from pipeforge.core.context import PipelineContext
from pipeforge.models.targets import BuildProject, StackTarget
from pipeforge.segments import CodeStarSourceSegment, SelfUpdateSegment, StackSegment


@pytest.fixture
def graph() -> ArtifactGraph:
    """Provide a fresh, empty artifact graph."""
    return ArtifactGraph()


@pytest.fixture
def context() -> PipelineContext:
    """Provide a deterministic expansion context with the default providers."""
    return PipelineContext(
        pipeline_name="TestPipeline",
        root_dir="app/",
        outdir="cdk.out",
        account="111111111111",
        region="eu-central-1",
    )


@pytest.fixture
def build_project() -> BuildProject:
    """Provide a minimal npm build project."""
    return BuildProject(
        build_spec={
            "version": "0.2",
            "phases": {"build": {"commands": ["npm ci", "npm run build"]}},
        }
    )


# ---------------------------------------------------------------------------
# Segment factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_source(graph: ArtifactGraph) -> Callable[..., CodeStarSourceSegment]:
    """Factory fixture: a CodeStar source writing to *output* (or a new artifact)."""

    def _factory(output: Artifact | None = None, **overrides: Any) -> CodeStarSourceSegment:
        defaults: dict[str, Any] = {
            "connection_arn": "arn:aws:codeconnections:eu-central-1:111111111111:connection/test",
            "owner": "acme",
            "repository": "infra",
            "branch": "main",
        }
        defaults.update(overrides)
        return CodeStarSourceSegment(output=output or graph.artifact("Source"), **defaults)

    return _factory


@pytest.fixture
def make_self_update(
    build_project: BuildProject,
) -> Callable[..., SelfUpdateSegment]:
    """Factory fixture: a self-update segment over *input*."""

    def _factory(input: Artifact, output: Artifact | None = None, **overrides: Any) -> SelfUpdateSegment:
        overrides.setdefault("project", build_project)
        return SelfUpdateSegment(input=input, output=output, **overrides)

    return _factory


@pytest.fixture
def make_stack(build_project: BuildProject) -> Callable[..., StackSegment]:
    """Factory fixture: a stack segment; ``build=True`` attaches the build project."""

    def _factory(
        input: Artifact,
        stack_name: str = "AppStack",
        *,
        build: bool = False,
        approval: bool = False,
        **overrides: Any,
    ) -> StackSegment:
        return StackSegment(
            stack=StackTarget(stack_name=stack_name),
            input=input,
            project=build_project if build else None,
            manual_approval=approval,
            **overrides,
        )

    return _factory


@pytest.fixture
def wired(
    graph: ArtifactGraph,
    make_source: Callable[..., CodeStarSourceSegment],
    make_self_update: Callable[..., SelfUpdateSegment],
    make_stack: Callable[..., StackSegment],
) -> dict[str, Any]:
    """A valid three-segment definition: source -> self-update -> stack (build)."""
    source_artifact = graph.artifact("Source")
    app_artifact = graph.artifact("App")
    source = make_source(source_artifact)
    self_update = make_self_update(source_artifact, app_artifact)
    stack = make_stack(app_artifact, "AppStack", build=True)
    return {
        "graph": graph,
        "source_artifact": source_artifact,
        "app_artifact": app_artifact,
        "source": source,
        "self_update": self_update,
        "stack": stack,
        "groups": [source, self_update, stack],
    }
