"""Assembled pipeline models — the output of the assembly pass."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pipeforge.core.errors import AssemblyError
from pipeforge.core.hasher import fingerprint as canonical_fingerprint
from pipeforge.models.actions import Action


class ConstructedSegment(BaseModel):
    """The result of expanding one segment: a name and its ordered actions."""

    model_config = ConfigDict(frozen=True)

    name: str
    actions: list[Action]


class AssembledStage(BaseModel):
    """One pipeline stage with the flattened actions of its segments."""

    model_config = ConfigDict(frozen=True)

    stage_name: str
    actions: list[Action]

    def action(self, action_name: str) -> Action:
        """Return the first action called *action_name*."""
        for action in self.actions:
            if action.action_name == action_name:
                return action
        raise KeyError(f"Stage {self.stage_name!r} has no action {action_name!r}")


class AssembledPipeline(BaseModel):
    """An ordered, validated plan ready to hand to the orchestrator."""

    model_config = ConfigDict(frozen=True)

    pipeline_name: str
    pipeline_type: str = "V2"
    restart_execution_on_update: bool = True
    stages: list[AssembledStage]

    @property
    def stage_names(self) -> list[str]:
        return [stage.stage_name for stage in self.stages]

    @property
    def action_count(self) -> int:
        return sum(len(stage.actions) for stage in self.stages)

    def stage(self, stage_name: str) -> AssembledStage:
        """Return the stage called *stage_name*."""
        for stage in self.stages:
            if stage.stage_name == stage_name:
                return stage
        raise KeyError(
            f"Unknown stage {stage_name!r}. Stages: {self.stage_names}"
        )

    def fingerprint(self) -> str:
        """Content address of the canonical plan ("sha256:<hex>").

        Two assemblies of the same definition always share a fingerprint.
        """
        return canonical_fingerprint(self)


class AssemblyResult(BaseModel):
    """Either an assembled pipeline or the validation error that stopped it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pipeline: AssembledPipeline | None = None
    error: AssemblyError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> AssembledPipeline:
        """Return the pipeline, raising the carried error if assembly failed."""
        if self.error is not None:
            raise self.error
        if self.pipeline is None:
            raise AssemblyError("Assembly result carries neither a pipeline nor an error")
        return self.pipeline
