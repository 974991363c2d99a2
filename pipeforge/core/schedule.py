"""Action ordering schedule for generic (build-and-deploy) segments.

A generic segment expands into up to five steps taken from a fixed
template.  Each step is present or absent depending on the segment's
configuration; run orders are assigned to the present steps only, starting
at 1, strictly increasing and without gaps.

    build=False approval=False  ->  Prepare=1 Execute=2
    build=True  approval=False  ->  Build=1 Publish=2 Prepare=3 Execute=4
    build=False approval=True   ->  Prepare=1 Approve=2 Execute=3
    build=True  approval=True   ->  Build=1 Publish=2 Prepare=3 Approve=4 Execute=5
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict


class ScheduleStep(str, Enum):
    """The conditional steps of a generic segment, in template order."""

    BUILD = "build"
    PUBLISH_ASSETS = "publish_assets"
    PREPARE_CHANGE_SET = "prepare_change_set"
    MANUAL_APPROVAL = "manual_approval"
    EXECUTE_CHANGE_SET = "execute_change_set"


class StepNotScheduledError(LookupError):
    """Raised when asking for the run order of an absent step."""


class ActionSchedule(BaseModel):
    """Presence flags for the conditional steps of one generic segment."""

    model_config = ConfigDict(frozen=True)

    build: bool = False
    approval: bool = False

    @property
    def steps(self) -> tuple[ScheduleStep, ...]:
        """Present steps, in template order."""
        return tuple(step for step in STEP_TEMPLATE if STEP_CONDITIONS[step](self))

    def run_orders(self) -> dict[ScheduleStep, int]:
        """Map each present step to its run order."""
        return {step: index for index, step in enumerate(self.steps, start=1)}

    def run_order(self, step: ScheduleStep) -> int:
        try:
            return self.run_orders()[step]
        except KeyError:
            raise StepNotScheduledError(
                f"Step {step.value!r} is not scheduled "
                f"(build={self.build}, approval={self.approval})"
            ) from None

    def __contains__(self, step: object) -> bool:
        return step in self.steps

    def __len__(self) -> int:
        return len(self.steps)


# Fixed relative order of all steps.
STEP_TEMPLATE: tuple[ScheduleStep, ...] = (
    ScheduleStep.BUILD,
    ScheduleStep.PUBLISH_ASSETS,
    ScheduleStep.PREPARE_CHANGE_SET,
    ScheduleStep.MANUAL_APPROVAL,
    ScheduleStep.EXECUTE_CHANGE_SET,
)

# Presence rule per step. Publishing assets only follows a build.
STEP_CONDITIONS: dict[ScheduleStep, Callable[[ActionSchedule], bool]] = {
    ScheduleStep.BUILD: lambda s: s.build,
    ScheduleStep.PUBLISH_ASSETS: lambda s: s.build,
    ScheduleStep.PREPARE_CHANGE_SET: lambda s: True,
    ScheduleStep.MANUAL_APPROVAL: lambda s: s.approval,
    ScheduleStep.EXECUTE_CHANGE_SET: lambda s: True,
}


def plan_run_orders(*, build: bool, approval: bool) -> dict[ScheduleStep, int]:
    """Shorthand for ``ActionSchedule(build=..., approval=...).run_orders()``."""
    return ActionSchedule(build=build, approval=approval).run_orders()
