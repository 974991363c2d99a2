"""Pipeline context — everything a segment may read while expanding."""

from __future__ import annotations

import posixpath

from pydantic import BaseModel, ConfigDict, Field

from pipeforge.providers import Providers


class PipelineContext(BaseModel):
    """Read-only expansion context shared by all segments of one pipeline.

    ``build_dir`` is where the synthesized app lives inside source and build
    artifacts: ``root_dir`` joined with the CDK output directory.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    pipeline_name: str
    root_dir: str = "."
    outdir: str = "cdk.out"
    account: str | None = None
    region: str | None = None
    change_set_suffix: str = "Changes"
    default_output_file_name: str = "artifact.json"
    providers: Providers = Field(default_factory=Providers, exclude=True)

    @property
    def build_dir(self) -> str:
        return posixpath.normpath(posixpath.join(self.root_dir, self.outdir))
