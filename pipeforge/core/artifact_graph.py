"""Artifact graph — single-producer / multi-consumer registry.

The graph owns every artifact and every segment bound to one pipeline
definition.  Artifacts and segments are stored by identifier in two
mappings; producer and consumer relationships live in one ordered edge
list.  Neither artifacts nor segments hold references to each other, so the
"at most one producer" rule is a single uniqueness check over producer
edges.

Identifiers are assigned from per-graph counters (``artifact-1``,
``segment-1``, ...) so that two identical definitions build identical
graphs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pipeforge.core.errors import AlreadyProducedError, DuplicateArtifactNameError
from pipeforge.models.artifacts import ArtifactEdge, ArtifactPath, EdgeRole

if TYPE_CHECKING:
    from pipeforge.segments.base import Segment

logger = logging.getLogger(__name__)


class Artifact:
    """A named unit of data passed between segments.

    Created through ``ArtifactGraph.artifact()``.  All relationship queries
    are answered by the owning graph.
    """

    __slots__ = ("_graph", "_artifact_id", "_name")

    def __init__(self, graph: ArtifactGraph, artifact_id: str, name: str) -> None:
        self._graph = graph
        self._artifact_id = artifact_id
        self._name = name

    @property
    def artifact_id(self) -> str:
        return self._artifact_id

    @property
    def name(self) -> str:
        """Display name, unique within the owning graph."""
        return self._name

    @property
    def graph(self) -> ArtifactGraph:
        return self._graph

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def produce(self, segment: Segment) -> None:
        """Register *segment* as this artifact's producer.

        Not idempotent: a second call fails even with the same segment.
        """
        self._graph.register_producer(self, segment)

    def consume(self, segment: Segment) -> None:
        """Append *segment* to this artifact's consumers."""
        self._graph.register_consumer(self, segment)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def producer(self) -> Segment | None:
        return self._graph.producer_of(self)

    def consumers(self) -> list[Segment]:
        return self._graph.consumers_of(self)

    def at_path(self, file_name: str) -> ArtifactPath:
        """Reference a file inside this artifact."""
        return ArtifactPath(artifact_name=self.name, file_name=file_name)

    def __repr__(self) -> str:
        return f"<Artifact {self._artifact_id} name={self.name!r}>"


class ArtifactGraph:
    """Registry of artifacts, segments and their producer/consumer edges."""

    def __init__(self) -> None:
        self._artifacts: dict[str, Artifact] = {}
        self._segments: dict[str, Segment] = {}
        self._edges: list[ArtifactEdge] = []
        # artifact_id -> segment_id of its single producer
        self._producers: dict[str, str] = {}
        # display name -> artifact_id
        self._names: dict[str, str] = {}

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def artifact(self, name: str | None = None) -> Artifact:
        """Create and register a new artifact.

        Without a *name* the artifact is called ``Artifact_<n>`` after its
        identifier.  Explicit and derived names share one namespace; a name
        that is already taken raises ``DuplicateArtifactNameError``.
        """
        number = len(self._artifacts) + 1
        artifact_id = f"artifact-{number}"
        display_name = name or f"Artifact_{number}"
        existing = self._names.get(display_name)
        if existing is not None:
            raise DuplicateArtifactNameError(display_name, existing_id=existing)
        artifact = Artifact(self, artifact_id, display_name)
        self._artifacts[artifact_id] = artifact
        self._names[display_name] = artifact_id
        logger.debug("Registered %s", artifact)
        return artifact

    def free_name(self, base: str) -> str:
        """Return *base* if unused, else *base* suffixed with the next artifact number."""
        if base not in self._names:
            return base
        return f"{base}_{len(self._artifacts) + 1}"

    def register_segment(self, segment: Segment) -> str:
        """Register a segment and return its identifier."""
        segment_id = f"segment-{len(self._segments) + 1}"
        self._segments[segment_id] = segment
        return segment_id

    def register_producer(self, artifact: Artifact, segment: Segment) -> None:
        self._check_owned(artifact)
        existing = self._producers.get(artifact.artifact_id)
        if existing is not None:
            raise AlreadyProducedError(
                artifact.name,
                existing=repr(self._segments[existing]),
                attempted=repr(segment),
            )
        segment_id = self._segment_id(segment)
        self._producers[artifact.artifact_id] = segment_id
        self._edges.append(
            ArtifactEdge(
                artifact_id=artifact.artifact_id,
                segment_id=segment_id,
                role=EdgeRole.PRODUCER,
            )
        )
        logger.debug("%s produces %s", segment_id, artifact.artifact_id)

    def register_consumer(self, artifact: Artifact, segment: Segment) -> None:
        self._check_owned(artifact)
        segment_id = self._segment_id(segment)
        self._edges.append(
            ArtifactEdge(
                artifact_id=artifact.artifact_id,
                segment_id=segment_id,
                role=EdgeRole.CONSUMER,
            )
        )
        logger.debug("%s consumes %s", segment_id, artifact.artifact_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_produced(self, artifact: Artifact) -> bool:
        return artifact.artifact_id in self._producers

    def producer_of(self, artifact: Artifact) -> Segment | None:
        segment_id = self._producers.get(artifact.artifact_id)
        return self._segments[segment_id] if segment_id is not None else None

    def consumers_of(self, artifact: Artifact) -> list[Segment]:
        """Return consumers in registration order (duplicates preserved)."""
        return [
            self._segments[edge.segment_id]
            for edge in self._edges
            if edge.artifact_id == artifact.artifact_id
            and edge.role == EdgeRole.CONSUMER
        ]

    def dangling(self) -> list[Artifact]:
        """Return consumed artifacts without a producer, in edge order."""
        result: list[Artifact] = []
        seen: set[str] = set()
        for edge in self._edges:
            if edge.role != EdgeRole.CONSUMER or edge.artifact_id in seen:
                continue
            seen.add(edge.artifact_id)
            if edge.artifact_id not in self._producers:
                result.append(self._artifacts[edge.artifact_id])
        return result

    def edges(self) -> list[ArtifactEdge]:
        return list(self._edges)

    @property
    def artifacts(self) -> list[Artifact]:
        return list(self._artifacts.values())

    @property
    def segments(self) -> list[Segment]:
        return list(self._segments.values())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Artifact):
            return self._artifacts.get(item.artifact_id) is item
        return any(segment is item for segment in self._segments.values())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_owned(self, artifact: Artifact) -> None:
        if artifact not in self:
            raise ValueError(f"{artifact!r} does not belong to this graph")

    def _segment_id(self, segment: Segment) -> str:
        segment_id = getattr(segment, "segment_id", None)
        if segment_id is None or self._segments.get(segment_id) is not segment:
            raise ValueError(f"{segment!r} is not registered in this graph")
        return segment_id
