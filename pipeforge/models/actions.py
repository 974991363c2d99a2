"""Action model — the atomic unit a segment expands into.

Actions are opaque to the assembler: it orders them and groups them into
stages, but never reads ``configuration``.  The provider that built an
action owns the meaning of its parameters.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ActionCategory(str, Enum):
    """CodePipeline action categories used by the bundled providers."""

    SOURCE = "Source"
    BUILD = "Build"
    DEPLOY = "Deploy"
    APPROVAL = "Approval"


class Action(BaseModel):
    """A single pipeline action with its position inside a stage."""

    model_config = ConfigDict(frozen=True)

    action_name: str
    run_order: int = 1
    category: ActionCategory
    provider: str  # "CodeBuild", "CloudFormation", "Manual", ...
    owner: str = "AWS"
    input_artifacts: list[str] = []  # artifact names
    output_artifacts: list[str] = []  # artifact names
    configuration: dict[str, Any] = {}
    account: str | None = None
    region: str | None = None
    namespace: str | None = None  # variables namespace
