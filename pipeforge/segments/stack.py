"""Generic build-and-deploy segment for one stack.

The only segment with a conditional action schedule (see
``pipeforge.core.schedule``):

    [Build, PublishAssets]   when a build project is given
    PrepareChanges           always
    [ApproveChanges]         when manual approval is requested
    ExecuteChanges           always

Outputs, in order: the build output (created here, only with a build
project) and the deployment output (only when the caller passes one).  The
build output is called ``<stack>_Build``; when that name is already taken in
the graph, the artifact number is appended.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Sequence
from typing import ClassVar

from pipeforge.core.artifact_graph import Artifact
from pipeforge.core.context import PipelineContext
from pipeforge.core.errors import AlreadyProducedError, SegmentConfigError
from pipeforge.core.schedule import ActionSchedule, ScheduleStep
from pipeforge.models.actions import Action
from pipeforge.models.pipeline import ConstructedSegment
from pipeforge.models.targets import (
    BuildEnvironmentVariable,
    BuildProject,
    DeploymentTarget,
    StackTarget,
)
from pipeforge.segments.base import Segment, SegmentKind, as_artifact_list, common_graph

logger = logging.getLogger(__name__)


class StackSegment(Segment):
    """Build (optionally) and deploy one stack through a change set.

    Parameters
    ----------
    stack:
        The stack to deploy.
    input:
        Input artifact(s); the first one is the primary input.
    project:
        Build configuration.  When omitted the template is read straight from
        the primary input and no build or asset publishing happens.
    environment_variables:
        Environment variables for the build.
    stack_name:
        Name of the deployed stack.  Defaults to ``stack.stack_name``.
    account, region:
        Deployment account/region.  Default to the stack's own.
    output:
        Artifact receiving the stack outputs file.
    output_file_name:
        File name inside *output*.  Defaults to ``artifact.json``.
    manual_approval:
        Require a manual approval between preparing and executing changes.
    """

    kind: ClassVar[SegmentKind] = SegmentKind.GENERIC

    def __init__(
        self,
        *,
        stack: StackTarget,
        input: Artifact | Sequence[Artifact],
        project: BuildProject | None = None,
        environment_variables: dict[str, BuildEnvironmentVariable] | None = None,
        stack_name: str | None = None,
        account: str | None = None,
        region: str | None = None,
        output: Artifact | None = None,
        output_file_name: str | None = None,
        manual_approval: bool = False,
    ) -> None:
        inputs = as_artifact_list(input, "input")
        if not inputs:
            raise SegmentConfigError(
                f"StackSegment for {stack.stack_name!r} needs a primary input artifact"
            )
        if output is not None:
            if not isinstance(output, Artifact):
                raise SegmentConfigError(
                    f"StackSegment output must be an artifact, got {output!r}"
                )
            existing = output.producer()
            if existing is not None:
                raise AlreadyProducedError(
                    output.name, existing=repr(existing), attempted="StackSegment"
                )

        graph = common_graph("StackSegment", inputs + ([output] if output is not None else []))

        self.stack = stack
        self.project = project
        self.environment_variables = dict(environment_variables or {})
        self.stack_name = stack_name
        self.account = account
        self.region = region
        self.output = output
        self.output_file_name = output_file_name
        self.manual_approval = manual_approval

        self.build_output: Artifact | None = None
        if project is not None:
            self.build_output = graph.artifact(graph.free_name(f"{stack.stack_name}_Build"))

        outputs = [a for a in (self.build_output, output) if a is not None]
        super().__init__(inputs=inputs, outputs=outputs)

    @property
    def name(self) -> str:
        return self.stack.stack_name

    @property
    def input(self) -> Artifact:
        return self.inputs[0]

    @property
    def extra_inputs(self) -> list[Artifact]:
        return list(self.inputs[1:])

    @property
    def schedule(self) -> ActionSchedule:
        return ActionSchedule(build=self.project is not None, approval=self.manual_approval)

    def deployment_target(self, context: PipelineContext) -> DeploymentTarget:
        """Change-set identity shared by the prepare and execute actions."""
        return DeploymentTarget(
            stack_name=self.stack_name or self.stack.stack_name,
            change_set_name=f"{self.stack.stack_name}{context.change_set_suffix}",
            account=self.account or self.stack.account,
            region=self.region or self.stack.region,
        )

    def expand(self, context: PipelineContext) -> ConstructedSegment:
        providers = context.providers
        run_orders = self.schedule.run_orders()
        target = self.deployment_target(context)
        actions: list[Action] = []

        # The template comes from the build output if a build ran.
        deploy_input = self.input
        if self.project is not None and self.build_output is not None:
            actions.append(
                providers.build.build(
                    action_name="Build",
                    project=self.project,
                    project_name=f"{self.name}Build",
                    input=self.input,
                    extra_inputs=self.extra_inputs,
                    outputs=[self.build_output],
                    environment_variables=self.environment_variables,
                    build_dir=context.build_dir,
                    run_order=run_orders[ScheduleStep.BUILD],
                )
            )
            actions.append(
                providers.build.publish_assets(
                    action_name="PublishAssets",
                    project_name=f"{self.name}PublishAssets",
                    input=self.build_output,
                    manifest_path=context.build_dir,
                    account=context.account,
                    run_order=run_orders[ScheduleStep.PUBLISH_ASSETS],
                )
            )
            deploy_input = self.build_output

        template_path = deploy_input.at_path(
            posixpath.join(context.build_dir, self.stack.template_file_name)
        )
        actions.append(
            providers.deployment.prepare_change_set(
                action_name="PrepareChanges",
                target=target,
                template_path=template_path,
                run_order=run_orders[ScheduleStep.PREPARE_CHANGE_SET],
                admin_permissions=True,
            )
        )

        if ScheduleStep.MANUAL_APPROVAL in run_orders:
            actions.append(
                providers.approval.approve(
                    action_name="ApproveChanges",
                    run_order=run_orders[ScheduleStep.MANUAL_APPROVAL],
                    additional_information=f"Review change set {target.change_set_name}",
                )
            )

        output_file_name = None
        if self.output is not None:
            output_file_name = self.output_file_name or context.default_output_file_name
        actions.append(
            providers.deployment.execute_change_set(
                action_name="ExecuteChanges",
                target=target,
                run_order=run_orders[ScheduleStep.EXECUTE_CHANGE_SET],
                output=self.output,
                output_file_name=output_file_name,
            )
        )

        logger.debug(
            "Expanded %s into %d actions (%s)",
            self.name,
            len(actions),
            ", ".join(f"{a.action_name}={a.run_order}" for a in actions),
        )
        return ConstructedSegment(name=self.name, actions=actions)
