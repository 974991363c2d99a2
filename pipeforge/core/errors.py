"""Definition-time error taxonomy.

Every error here describes a mistake in a pipeline definition. None of them
is retryable and none is recovered locally: the first violation aborts the
whole assembly.

Construction-time errors (``AlreadyProducedError``, ``SegmentConfigError``,
``DuplicateArtifactNameError``) are raised directly from segment and
artifact constructors.  Assembly errors are returned
inside an ``AssemblyResult`` and only raised when the caller unwraps it.
"""

from __future__ import annotations


class PipelineDefinitionError(ValueError):
    """Base class for all pipeline definition errors."""


class AlreadyProducedError(PipelineDefinitionError):
    """Raised when an artifact receives a second producer registration."""

    def __init__(self, artifact_name: str, existing: str, attempted: str) -> None:
        self.artifact_name = artifact_name
        self.existing = existing
        self.attempted = attempted
        super().__init__(
            f"Artifact {artifact_name!r} is already produced by {existing!r}; "
            f"{attempted!r} cannot produce it again"
        )


class SegmentConfigError(PipelineDefinitionError):
    """Raised when a segment is constructed with an invalid artifact binding."""


class DuplicateArtifactNameError(PipelineDefinitionError):
    """Raised when two artifacts in one graph would share a display name.

    Actions refer to artifacts by name only, so a shared name would merge
    two distinct artifacts in the assembled plan.
    """

    def __init__(self, artifact_name: str, existing_id: str) -> None:
        self.artifact_name = artifact_name
        self.existing_id = existing_id
        super().__init__(
            f"Artifact name {artifact_name!r} is already used by {existing_id}"
        )


# ---------------------------------------------------------------------------
# Assembly errors
# ---------------------------------------------------------------------------


class AssemblyError(PipelineDefinitionError):
    """Base class for structural errors detected by the assembler.

    Parameters
    ----------
    message:
        Human-readable description.
    group_index:
        Position of the offending segment group, if any.
    segment_name:
        Name of the offending segment, if any.
    """

    code: str = "assembly_error"

    def __init__(
        self,
        message: str,
        *,
        group_index: int | None = None,
        segment_name: str | None = None,
    ) -> None:
        self.message = message
        self.group_index = group_index
        self.segment_name = segment_name
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} group_index={self.group_index!r} "
            f"segment_name={self.segment_name!r}>"
        )


class DanglingArtifactError(AssemblyError):
    """A segment consumes an artifact that no segment produces."""

    code = "dangling_artifact"


class MisplacedSourceError(AssemblyError):
    """A source segment outside the first group, or a non-source inside it."""

    code = "misplaced_source"


class MissingSelfUpdateError(AssemblyError):
    """No self-update segment was declared."""

    code = "missing_self_update"


class DuplicateSelfUpdateError(AssemblyError):
    """More than one self-update segment was declared."""

    code = "duplicate_self_update"


class MisplacedSelfUpdateError(AssemblyError):
    """The self-update segment is not alone in the second group."""

    code = "misplaced_self_update"


class EmptyStageError(AssemblyError):
    """A segment group contains no segments."""

    code = "empty_stage"


class DuplicateStageNameError(AssemblyError):
    """Two stages resolve to the same stage name."""

    code = "duplicate_stage_name"


class DuplicateSegmentError(AssemblyError):
    """The same segment instance was declared more than once."""

    code = "duplicate_segment"
