"""Pipeline assembler — validates segment groups and flattens them into stages.

Assembly is one synchronous, all-or-nothing pass:

1. Graph completeness: every consumed artifact has a producer among the
   declared segments.
2. Source placement: the first group holds sources only; no later group
   holds a source.
3. Self-update placement: exactly one self-update segment, alone, in the
   second group.
4. Stage sanity: no empty group, no segment declared twice, no two stages
   resolving to the same name.
5. Expansion: groups in order, members in declared order.

Any failure in steps 1-4 stops assembly before a single segment is
expanded.  ``assemble()`` returns the failure inside an ``AssemblyResult``;
``validate()`` raises it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from pipeforge.core.context import PipelineContext
from pipeforge.core.errors import (
    AssemblyError,
    DanglingArtifactError,
    DuplicateSegmentError,
    DuplicateSelfUpdateError,
    DuplicateStageNameError,
    EmptyStageError,
    MisplacedSelfUpdateError,
    MisplacedSourceError,
    MissingSelfUpdateError,
)
from pipeforge.models.pipeline import AssembledPipeline, AssembledStage, AssemblyResult
from pipeforge.segments.base import Segment, SegmentGroup, SegmentKind

logger = logging.getLogger(__name__)

GroupLike = Segment | Sequence[Segment] | SegmentGroup

# Fixed stage name per segment kind; None means "join the member names".
FIXED_STAGE_NAMES: dict[SegmentKind, str | None] = {
    SegmentKind.SOURCE: "Source",
    SegmentKind.SELF_UPDATE: "Pipeline",
    SegmentKind.GENERIC: None,
}

SOURCE_GROUP_INDEX = 0
SELF_UPDATE_GROUP_INDEX = 1


def normalize_groups(items: Iterable[GroupLike]) -> list[SegmentGroup]:
    """Turn bare segments and segment sequences into ``SegmentGroup`` objects.

    A bare segment becomes a group of one; a list or tuple of segments
    shares one stage; an existing ``SegmentGroup`` is kept as is.
    """
    groups: list[SegmentGroup] = []
    for index, item in enumerate(items):
        if isinstance(item, SegmentGroup):
            groups.append(item)
            continue
        members = (item,) if isinstance(item, Segment) else tuple(item)
        for member in members:
            if not isinstance(member, Segment):
                raise TypeError(
                    f"Group {index} must contain segments, got {type(member).__name__}"
                )
        groups.append(SegmentGroup(segments=members))
    return groups


def stage_name_for(group: SegmentGroup) -> str:
    """Resolve the stage name of a (non-empty) group.

    The declared name wins; otherwise sources and the self-update segment
    give fixed names and generic segments join their names with ``-``.
    """
    if group.stage_name:
        return group.stage_name
    fixed = FIXED_STAGE_NAMES[group.segments[0].kind]
    if fixed is not None:
        return fixed
    return "-".join(segment.name for segment in group.segments)


class PipelineAssembler:
    """Assemble segment groups into an ``AssembledPipeline``.

    Parameters
    ----------
    context:
        Expansion context handed to every segment.
    """

    def __init__(self, context: PipelineContext) -> None:
        self.context = context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def assemble(self, items: Iterable[GroupLike]) -> AssemblyResult:
        """Validate and expand *items*; never raises on a structural error."""
        groups = normalize_groups(items)
        try:
            self._validate(groups)
        except AssemblyError as exc:
            logger.warning(
                "Pipeline %s rejected (%s): %s",
                self.context.pipeline_name,
                exc.code,
                exc.message,
            )
            return AssemblyResult(error=exc)

        pipeline = AssembledPipeline(
            pipeline_name=self.context.pipeline_name,
            stages=[self._expand_group(group) for group in groups],
        )
        logger.info(
            "Assembled pipeline %s: %d stages, %d actions",
            pipeline.pipeline_name,
            len(pipeline.stages),
            pipeline.action_count,
        )
        return AssemblyResult(pipeline=pipeline)

    def validate(self, items: Iterable[GroupLike]) -> None:
        """Run every structural check, raising the first ``AssemblyError``."""
        self._validate(normalize_groups(items))

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _validate(self, groups: list[SegmentGroup]) -> None:
        self._check_graph_complete(groups)
        self._check_source_placement(groups)
        self._check_self_update_placement(groups)
        self._check_stages(groups)

    def _check_graph_complete(self, groups: list[SegmentGroup]) -> None:
        declared = {id(segment) for group in groups for segment in group.segments}
        for index, group in enumerate(groups):
            for segment in group.segments:
                for artifact in segment.inputs:
                    producer = artifact.producer()
                    if producer is None:
                        raise DanglingArtifactError(
                            f"Artifact {artifact.name!r} consumed by {segment.name!r} "
                            "is never produced",
                            group_index=index,
                            segment_name=segment.name,
                        )
                    if id(producer) not in declared:
                        raise DanglingArtifactError(
                            f"Artifact {artifact.name!r} consumed by {segment.name!r} "
                            f"is produced by {producer!r}, which is not part of the pipeline",
                            group_index=index,
                            segment_name=segment.name,
                        )

    def _check_source_placement(self, groups: list[SegmentGroup]) -> None:
        if not groups:
            raise MisplacedSourceError("A pipeline must start with a source group")
        for index, group in enumerate(groups):
            for segment in group.segments:
                is_source = segment.kind is SegmentKind.SOURCE
                if index == SOURCE_GROUP_INDEX and not is_source:
                    raise MisplacedSourceError(
                        f"The first group may only contain source segments, "
                        f"found {segment.name!r}",
                        group_index=index,
                        segment_name=segment.name,
                    )
                if index != SOURCE_GROUP_INDEX and is_source:
                    raise MisplacedSourceError(
                        f"Source segments belong in the first group, found one in group {index}",
                        group_index=index,
                        segment_name=segment.name,
                    )

    def _check_self_update_placement(self, groups: list[SegmentGroup]) -> None:
        found = [
            (index, segment)
            for index, group in enumerate(groups)
            for segment in group.segments
            if segment.kind is SegmentKind.SELF_UPDATE
        ]
        if not found:
            raise MissingSelfUpdateError("A pipeline needs exactly one self-update segment")
        if len(found) > 1:
            index, segment = found[1]
            raise DuplicateSelfUpdateError(
                f"Found {len(found)} self-update segments; exactly one is allowed",
                group_index=index,
                segment_name=segment.name,
            )

        index, segment = found[0]
        if index != SELF_UPDATE_GROUP_INDEX:
            raise MisplacedSelfUpdateError(
                f"The self-update segment must be the second group, found it in group {index}",
                group_index=index,
                segment_name=segment.name,
            )
        if len(groups[index].segments) != 1:
            raise MisplacedSelfUpdateError(
                "The self-update segment must be alone in its group",
                group_index=index,
                segment_name=segment.name,
            )

    def _check_stages(self, groups: list[SegmentGroup]) -> None:
        for index, group in enumerate(groups):
            if not group.segments:
                raise EmptyStageError(f"Group {index} has no segments", group_index=index)

        seen_segments: set[int] = set()
        for index, group in enumerate(groups):
            for segment in group.segments:
                if id(segment) in seen_segments:
                    raise DuplicateSegmentError(
                        f"Segment {segment!r} is declared more than once",
                        group_index=index,
                        segment_name=segment.name,
                    )
                seen_segments.add(id(segment))

        seen_names: dict[str, int] = {}
        for index, group in enumerate(groups):
            name = stage_name_for(group)
            if name in seen_names:
                raise DuplicateStageNameError(
                    f"Stage name {name!r} is used by groups {seen_names[name]} and {index}",
                    group_index=index,
                )
            seen_names[name] = index

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def _expand_group(self, group: SegmentGroup) -> AssembledStage:
        actions = []
        for segment in group.segments:
            actions.extend(segment.expand(self.context).actions)
        stage = AssembledStage(stage_name=stage_name_for(group), actions=actions)
        logger.info("Stage %s: %d actions", stage.stage_name, len(stage.actions))
        return stage
