"""Pipeline definition — name, segment groups and context in one object.

``PipelineDefinition`` is what users declare in their own modules and what
the CLI loads.  It resolves explicit arguments against ``AssemblySettings``
once, at construction, and hands the assembler a frozen context.
"""

from __future__ import annotations

from collections.abc import Iterable

from pipeforge.config import AssemblySettings
from pipeforge.core.assembler import GroupLike, PipelineAssembler, normalize_groups
from pipeforge.core.context import PipelineContext
from pipeforge.models.pipeline import AssemblyResult
from pipeforge.providers import Providers
from pipeforge.segments.base import SegmentGroup


class PipelineDefinition:
    """A named, ordered list of segment groups ready to be assembled.

    Parameters
    ----------
    name:
        Pipeline (and pipeline stack) name.
    segments:
        Groups in stage order.  Each item is a segment, a sequence of
        segments sharing a stage, or a ``SegmentGroup``.
    root_dir:
        Directory of the CDK app inside the source artifact.
    outdir:
        CDK output directory relative to *root_dir*.
    account, region:
        Account/region of the pipeline itself.
    providers:
        Action providers.  Defaults to the AWS providers configured from
        *settings*.
    settings:
        Defaults for everything not given explicitly.
    """

    def __init__(
        self,
        name: str,
        segments: Iterable[GroupLike],
        *,
        root_dir: str | None = None,
        outdir: str | None = None,
        account: str | None = None,
        region: str | None = None,
        providers: Providers | None = None,
        settings: AssemblySettings | None = None,
    ) -> None:
        settings = settings or AssemblySettings()
        self.name = name
        self.groups: list[SegmentGroup] = normalize_groups(segments)
        self.context = PipelineContext(
            pipeline_name=name,
            root_dir=root_dir if root_dir is not None else settings.root_dir,
            outdir=outdir if outdir is not None else settings.cdk_outdir,
            account=account,
            region=region,
            change_set_suffix=settings.change_set_suffix,
            default_output_file_name=settings.default_output_file_name,
            providers=providers or Providers.from_settings(settings),
        )

    def assemble(self) -> AssemblyResult:
        """Validate and expand every group into an assembled pipeline."""
        return PipelineAssembler(self.context).assemble(self.groups)

    def __repr__(self) -> str:
        return f"<PipelineDefinition {self.name!r} groups={len(self.groups)}>"
