"""Assembly settings — env-driven defaults for pipeline definitions.

Centralized config using pydantic-settings. Reads from a .env file and
PIPEFORGE_* environment variables.

Settings never reach the assembler implicitly: a ``PipelineDefinition``
copies the values it needs into an explicit ``PipelineContext`` so that an
assembled plan depends only on what was handed to it.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class AssemblySettings(BaseSettings):
    """Assembly configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export PIPEFORGE_LOG_LEVEL=DEBUG
        export PIPEFORGE_ROOT_DIR=infra/
        export PIPEFORGE_CDK_OUTDIR=cdk.out

    Or via .env file::

        PIPEFORGE_ENVIRONMENT=production
        PIPEFORGE_CHANGE_SET_SUFFIX=Changes
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PIPEFORGE_",
        env_file_encoding="utf-8",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Layout of the synthesized app inside the source artifact
    root_dir: str = "."
    cdk_outdir: str = "cdk.out"

    # Naming defaults
    default_output_file_name: str = "artifact.json"
    change_set_suffix: str = "Changes"

    # Build environment for generated CodeBuild projects
    build_image: str = "aws/codebuild/amazonlinux2-x86_64-standard:5.0"
    compute_type: str = "BUILD_GENERAL1_SMALL"
    publish_assets_package: str = "@flit/publish-cdk-assets@latest"


# Module-level singleton: import as `from pipeforge.config import settings`
settings = AssemblySettings()
