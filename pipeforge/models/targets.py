"""Deployment target and build project models."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class StackTarget(BaseModel):
    """A synthesized stack that a generic segment deploys.

    The template file lives inside the build directory of the artifact the
    deployment reads from.
    """

    model_config = ConfigDict(frozen=True)

    stack_name: str
    template_file: str = ""  # defaults to "<stack_name>.template.json"
    account: str | None = None
    region: str | None = None

    @property
    def template_file_name(self) -> str:
        return self.template_file or f"{self.stack_name}.template.json"


class DeploymentTarget(BaseModel):
    """Change-set identity shared by the prepare and execute actions."""

    model_config = ConfigDict(frozen=True)

    stack_name: str
    change_set_name: str
    account: str | None = None
    region: str | None = None


class BuildEnvironmentVariableType(str, Enum):
    PLAINTEXT = "PLAINTEXT"
    PARAMETER_STORE = "PARAMETER_STORE"
    SECRETS_MANAGER = "SECRETS_MANAGER"


class BuildEnvironmentVariable(BaseModel):
    """An environment variable passed to a CodeBuild action."""

    model_config = ConfigDict(frozen=True)

    value: str
    type: BuildEnvironmentVariableType = BuildEnvironmentVariableType.PLAINTEXT


class BuildProject(BaseModel):
    """Build configuration for a CodeBuild-backed step.

    ``build_spec`` is a buildspec mapping (version, phases, artifacts, ...).
    It is merged with the artifact file list of the synthesized app before
    it is handed to the build provider.
    """

    model_config = ConfigDict(frozen=True)

    build_spec: dict[str, Any] | None = None
    build_image: str | None = None  # falls back to the context default
    compute_type: str | None = None
    privileged: bool = False
    role_arn: str | None = None
