"""Self-update segment — keeps the pipeline definition in sync with source.

Exactly one self-update segment exists per pipeline and it owns the second
stage.  It expands into one action: a build that re-synthesizes the app from
the source artifact, exports the synthesized app as its optional output and
redeploys the pipeline stack.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from pipeforge.core.artifact_graph import Artifact
from pipeforge.core.context import PipelineContext
from pipeforge.core.errors import SegmentConfigError
from pipeforge.models.pipeline import ConstructedSegment
from pipeforge.models.targets import BuildEnvironmentVariable, BuildProject
from pipeforge.segments.base import Segment, SegmentKind, as_artifact_list


class SelfUpdateSegment(Segment):
    """Rebuild and redeploy the pipeline itself.

    Parameters
    ----------
    input:
        Source artifact(s); the first one is the primary input.
    project:
        Build configuration that synthesizes the app,
        e.g. ``npm ci && npm run build``.
    output:
        Optional artifact receiving the synthesized app for later stages.
    environment_variables:
        Environment variables for the build.
    """

    kind: ClassVar[SegmentKind] = SegmentKind.SELF_UPDATE

    def __init__(
        self,
        *,
        input: Artifact | Sequence[Artifact],
        project: BuildProject,
        output: Artifact | None = None,
        environment_variables: dict[str, BuildEnvironmentVariable] | None = None,
    ) -> None:
        inputs = as_artifact_list(input, "input")
        if not inputs:
            raise SegmentConfigError("SelfUpdateSegment needs at least one input artifact")
        if output is not None and not isinstance(output, Artifact):
            raise SegmentConfigError(
                f"SelfUpdateSegment takes at most one output artifact, got {output!r}"
            )
        self.project = project
        self.environment_variables = dict(environment_variables or {})
        super().__init__(inputs=inputs, outputs=[output] if output is not None else [])

    @property
    def name(self) -> str:
        return "Pipeline"

    @property
    def input(self) -> Artifact:
        return self.inputs[0]

    @property
    def extra_inputs(self) -> list[Artifact]:
        return list(self.inputs[1:])

    def expand(self, context: PipelineContext) -> ConstructedSegment:
        action = context.providers.build.self_mutate(
            action_name="SelfMutate",
            project=self.project,
            project_name=f"{context.pipeline_name}SelfMutate",
            input=self.input,
            extra_inputs=self.extra_inputs,
            outputs=list(self.outputs),
            environment_variables=self.environment_variables,
            build_dir=context.build_dir,
            pipeline_name=context.pipeline_name,
            run_order=1,
        )
        return ConstructedSegment(name=self.name, actions=[action])
