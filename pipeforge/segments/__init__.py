"""Pipeforge segments — the units a pipeline definition is declared in.

Usage::

    from pipeforge.core.artifact_graph import ArtifactGraph
    from pipeforge.segments import CodeStarSourceSegment, SelfUpdateSegment, StackSegment

    graph = ArtifactGraph()
    source = graph.artifact("Source")
    CodeStarSourceSegment(output=source, connection_arn=..., owner="acme", repository="infra")
"""

from __future__ import annotations

from pipeforge.segments.base import Segment, SegmentGroup, SegmentKind
from pipeforge.segments.self_update import SelfUpdateSegment
from pipeforge.segments.source import (
    CodeCommitSourceSegment,
    CodeStarSourceSegment,
    GitHubSourceSegment,
    S3SourceSegment,
    SourceSegment,
)
from pipeforge.segments.stack import StackSegment

__all__ = [
    "Segment",
    "SegmentGroup",
    "SegmentKind",
    "SourceSegment",
    "CodeStarSourceSegment",
    "GitHubSourceSegment",
    "CodeCommitSourceSegment",
    "S3SourceSegment",
    "SelfUpdateSegment",
    "StackSegment",
]
