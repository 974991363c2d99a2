"""Source trigger settings for the bundled source connectors."""

from __future__ import annotations

from enum import Enum


class GitHubTrigger(str, Enum):
    NONE = "None"
    POLL = "Poll"
    WEBHOOK = "WebHook"


class CodeCommitTrigger(str, Enum):
    NONE = "None"
    POLL = "Poll"
    EVENTS = "Events"


class S3Trigger(str, Enum):
    NONE = "None"
    POLL = "Poll"
    EVENTS = "Events"
