"""Abstract segment with artifact binding at construction time.

Every concrete segment declares its ``kind`` and implements ``name`` and
``expand()``.  The constructor here is shared by all variants and performs
the only side effect a segment ever has: registering itself in the artifact
graph as consumer of its inputs and producer of its outputs.

Binding is all-or-nothing: every output is checked for an existing
producer before any edge is written, so a failed construction leaves the
graph untouched.
"""

from __future__ import annotations

import abc
from collections.abc import Sequence
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from pydantic import BaseModel, ConfigDict

from pipeforge.core.artifact_graph import Artifact, ArtifactGraph
from pipeforge.core.errors import AlreadyProducedError, SegmentConfigError

if TYPE_CHECKING:
    from pipeforge.core.context import PipelineContext
    from pipeforge.models.pipeline import ConstructedSegment


class SegmentKind(str, Enum):
    """The closed set of segment variants."""

    SOURCE = "source"
    SELF_UPDATE = "self_update"
    GENERIC = "generic"


def as_artifact_list(value: Artifact | Sequence[Artifact] | None, field: str) -> list[Artifact]:
    """Normalize a single artifact or a sequence of artifacts into a list."""
    if value is None:
        return []
    if isinstance(value, Artifact):
        return [value]
    items = list(value)
    for item in items:
        if not isinstance(item, Artifact):
            raise SegmentConfigError(f"{field} must contain artifacts, got {item!r}")
    return items


def common_graph(owner: str, artifacts: Sequence[Artifact]) -> ArtifactGraph:
    """Return the graph shared by *artifacts*, which must not be empty."""
    graph = artifacts[0].graph
    for artifact in artifacts:
        if artifact.graph is not graph:
            raise SegmentConfigError(
                f"{owner} binds artifacts from different graphs: "
                f"{artifacts[0]!r} and {artifact!r}"
            )
    return graph


class Segment(abc.ABC):
    """Abstract base for all pipeline segments.

    Subclasses **must** set:
        * ``kind`` — the ``SegmentKind`` tag used by placement checks.

    Subclasses **must** implement:
        * ``name`` — the name the segment expands under.
        * ``expand(context)`` — lower the segment into ordered actions.
    """

    kind: ClassVar[SegmentKind]

    def __init__(
        self,
        *,
        inputs: Sequence[Artifact] = (),
        outputs: Sequence[Artifact] = (),
    ) -> None:
        inputs = tuple(inputs)
        outputs = tuple(outputs)
        bound = inputs + outputs
        if not bound:
            raise SegmentConfigError(
                f"{type(self).__name__} must be bound to at least one artifact"
            )

        graph = common_graph(type(self).__name__, bound)

        seen: set[str] = set()
        for artifact in outputs:
            if artifact.artifact_id in seen:
                raise SegmentConfigError(
                    f"{type(self).__name__} lists output {artifact.name!r} twice"
                )
            seen.add(artifact.artifact_id)
            existing = artifact.producer()
            if existing is not None:
                raise AlreadyProducedError(
                    artifact.name,
                    existing=repr(existing),
                    attempted=type(self).__name__,
                )

        self._graph = graph
        self._inputs = inputs
        self._outputs = outputs
        self.segment_id = graph.register_segment(self)
        for artifact in inputs:
            artifact.consume(self)
        for artifact in outputs:
            artifact.produce(self)

    # ------------------------------------------------------------------
    # Abstract interface
    # ------------------------------------------------------------------

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Name of the constructed segment, known before expansion."""
        ...

    @abc.abstractmethod
    def expand(self, context: PipelineContext) -> ConstructedSegment:
        """Lower this segment into a named, ordered list of actions.

        Must be deterministic: the same configuration and context always
        produce the same actions in the same order.
        """
        ...

    # ------------------------------------------------------------------
    # Bindings
    # ------------------------------------------------------------------

    @property
    def graph(self) -> ArtifactGraph:
        return self._graph

    @property
    def inputs(self) -> tuple[Artifact, ...]:
        return self._inputs

    @property
    def outputs(self) -> tuple[Artifact, ...]:
        return self._outputs

    def __repr__(self) -> str:
        segment_id = getattr(self, "segment_id", "unregistered")
        return f"<{type(self).__name__} {segment_id} kind={self.kind.value}>"


class SegmentGroup(BaseModel):
    """Segments that share one pipeline stage.

    ``stage_name`` overrides the derived stage name when given.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    segments: tuple[Segment, ...]
    stage_name: str | None = None
