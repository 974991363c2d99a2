"""Source segments — the first stage of every pipeline.

A source segment has no inputs and exactly one output.  It expands into a
single "fetch source" action named after the repository identity it reads
from, so several sources sharing the first stage stay distinguishable.
"""

from __future__ import annotations

import abc
from typing import ClassVar

from pydantic import SecretStr

from pipeforge.core.artifact_graph import Artifact
from pipeforge.core.context import PipelineContext
from pipeforge.core.errors import SegmentConfigError
from pipeforge.models.actions import Action
from pipeforge.models.pipeline import ConstructedSegment
from pipeforge.models.sources import CodeCommitTrigger, GitHubTrigger, S3Trigger
from pipeforge.segments.base import Segment, SegmentKind

DEFAULT_BRANCH = "master"


class SourceSegment(Segment):
    """Abstract source segment bound to a single output artifact."""

    kind: ClassVar[SegmentKind] = SegmentKind.SOURCE

    def __init__(self, output: Artifact) -> None:
        if not isinstance(output, Artifact):
            raise SegmentConfigError(
                f"{type(self).__name__} needs exactly one output artifact, got {output!r}"
            )
        super().__init__(outputs=[output])

    @property
    def output(self) -> Artifact:
        return self.outputs[0]

    @property
    def name(self) -> str:
        return "Source"

    @property
    @abc.abstractmethod
    def action_name(self) -> str:
        """Action name derived from the repository identity."""
        ...

    @abc.abstractmethod
    def source_action(self, context: PipelineContext) -> Action:
        ...

    def expand(self, context: PipelineContext) -> ConstructedSegment:
        return ConstructedSegment(name=self.name, actions=[self.source_action(context)])


class CodeStarSourceSegment(SourceSegment):
    """GitHub / Bitbucket repository read through a CodeStar connection.

    Parameters
    ----------
    output:
        Artifact receiving the checked-out source.
    connection_arn:
        ARN of the CodeStar connection with access to the repository.
    owner:
        Owning user or organization, e.g. ``"aws"``.
    repository:
        Repository name, e.g. ``"aws-cdk"``.
    branch:
        Branch to build. Defaults to ``"master"``.
    """

    def __init__(
        self,
        *,
        output: Artifact,
        connection_arn: str,
        owner: str,
        repository: str,
        branch: str | None = None,
        trigger_on_push: bool | None = None,
        variables_namespace: str | None = None,
    ) -> None:
        self.connection_arn = connection_arn
        self.owner = owner
        self.repository = repository
        self.branch = branch or DEFAULT_BRANCH
        self.trigger_on_push = trigger_on_push
        self.variables_namespace = variables_namespace
        super().__init__(output)

    @property
    def action_name(self) -> str:
        return f"{self.owner}/{self.repository}/{self.branch}"

    def source_action(self, context: PipelineContext) -> Action:
        return context.providers.source.codestar(
            action_name=self.action_name,
            output=self.output,
            connection_arn=self.connection_arn,
            owner=self.owner,
            repository=self.repository,
            branch=self.branch,
            trigger_on_push=self.trigger_on_push,
            variables_namespace=self.variables_namespace,
        )


class GitHubSourceSegment(SourceSegment):
    """GitHub repository read with an OAuth token."""

    def __init__(
        self,
        *,
        output: Artifact,
        oauth_token: SecretStr | str,
        owner: str,
        repository: str,
        branch: str | None = None,
        trigger: GitHubTrigger = GitHubTrigger.WEBHOOK,
        variables_namespace: str | None = None,
    ) -> None:
        self.oauth_token = (
            oauth_token if isinstance(oauth_token, SecretStr) else SecretStr(oauth_token)
        )
        self.owner = owner
        self.repository = repository
        self.branch = branch or DEFAULT_BRANCH
        self.trigger = trigger
        self.variables_namespace = variables_namespace
        super().__init__(output)

    @property
    def action_name(self) -> str:
        return f"{self.owner}-{self.repository}-{self.branch}"

    def source_action(self, context: PipelineContext) -> Action:
        return context.providers.source.github(
            action_name=self.action_name,
            output=self.output,
            oauth_token=self.oauth_token,
            owner=self.owner,
            repository=self.repository,
            branch=self.branch,
            trigger=self.trigger,
            variables_namespace=self.variables_namespace,
        )


class CodeCommitSourceSegment(SourceSegment):
    """CodeCommit repository source."""

    def __init__(
        self,
        *,
        output: Artifact,
        repository: str,
        branch: str | None = None,
        trigger: CodeCommitTrigger = CodeCommitTrigger.EVENTS,
        variables_namespace: str | None = None,
    ) -> None:
        self.repository = repository
        self.branch = branch or DEFAULT_BRANCH
        self.trigger = trigger
        self.variables_namespace = variables_namespace
        super().__init__(output)

    @property
    def action_name(self) -> str:
        return f"{self.repository}-{self.branch}"

    def source_action(self, context: PipelineContext) -> Action:
        return context.providers.source.codecommit(
            action_name=self.action_name,
            output=self.output,
            repository=self.repository,
            branch=self.branch,
            trigger=self.trigger,
            variables_namespace=self.variables_namespace,
        )


class S3SourceSegment(SourceSegment):
    """Zipped source object in an S3 bucket."""

    def __init__(
        self,
        *,
        output: Artifact,
        bucket: str,
        bucket_key: str,
        trigger: S3Trigger = S3Trigger.POLL,
        variables_namespace: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.bucket_key = bucket_key
        self.trigger = trigger
        self.variables_namespace = variables_namespace
        super().__init__(output)

    @property
    def action_name(self) -> str:
        return f"{self.bucket}-{self.bucket_key}"

    def source_action(self, context: PipelineContext) -> Action:
        return context.providers.source.s3(
            action_name=self.action_name,
            output=self.output,
            bucket=self.bucket,
            bucket_key=self.bucket_key,
            trigger=self.trigger,
            variables_namespace=self.variables_namespace,
        )
