"""Pipeforge: Deterministic Assembly of Self-Updating Deployment Pipelines.

v0.1.0 — Segment graph assembly:
  - Single-producer artifact graph with definition-time binding
  - Source, self-update and stack segments behind one expand() contract
  - Conditional action schedule (build / publish / prepare / approve / execute)
  - Structural validation returned as data (AssemblyResult)
  - Pluggable action providers with AWS CodePipeline defaults
  - Canonical plan fingerprints
  - Typer + Rich CLI: plan, validate, demo
"""

__version__ = "0.1.0"
__description__ = "Deterministic assembly of self-updating deployment pipelines"

from pipeforge.core.artifact_graph import Artifact, ArtifactGraph
from pipeforge.core.assembler import PipelineAssembler
from pipeforge.core.pipeline import PipelineDefinition
from pipeforge.cli.app import app as cli

__all__ = [
    "Artifact",
    "ArtifactGraph",
    "PipelineAssembler",
    "PipelineDefinition",
    "cli",
    "__version__",
]
