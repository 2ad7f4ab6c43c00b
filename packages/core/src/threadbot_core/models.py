"""Turn, reply target and turn-state types.

A turn is one handling of one webhook delivery. It is built by the router,
consumed synchronously by the orchestrator and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class EventKind(Enum):
    DISCUSSION_CREATED = ("discussion", "created")
    DISCUSSION_COMMENT_CREATED = ("discussion_comment", "created")
    PR_OPENED = ("pull_request", "opened")

    @property
    def event(self) -> str:
        return self.value[0]

    @property
    def action(self) -> str:
        return self.value[1]

    @classmethod
    def from_delivery(cls, event: str, action: str | None) -> EventKind | None:
        """Return the kind for a webhook ``(event, action)`` pair, or None if unsupported."""
        for kind in cls:
            if kind.value == (event, action):
                return kind
        return None


class ThreadKind(Enum):
    DISCUSSION = "discussion"  # GraphQL discussion reply, keyed by node id
    ISSUE = "issue"  # REST issue/PR comment, keyed by owner/repo/number


@dataclass(frozen=True)
class ReplyTarget:
    kind: ThreadKind
    node_id: str | None = None
    owner: str | None = None
    repo: str | None = None
    number: int | None = None

    @classmethod
    def discussion(cls, node_id: str) -> ReplyTarget:
        return cls(kind=ThreadKind.DISCUSSION, node_id=node_id)

    @classmethod
    def issue(cls, owner: str, repo: str, number: int) -> ReplyTarget:
        return cls(kind=ThreadKind.ISSUE, owner=owner, repo=repo, number=number)

    def __str__(self) -> str:
        if self.kind is ThreadKind.DISCUSSION:
            return f"discussion:{self.node_id}"
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class Turn:
    kind: EventKind
    owner: str
    repo: str
    actor: str
    target: ReplyTarget
    number: int | None = None
    title: str = ""
    body: str = ""
    # Only set for discussion comments; title/body then describe the parent discussion.
    comment: str = ""

    @property
    def thread(self) -> str:
        """Human-readable thread id used in log lines, e.g. ``octo/repo#12``."""
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class Mention:
    """Result of parsing a comment body for a bot mention."""

    mentioned: bool
    is_self: bool
    query: str
    is_help: bool = False

    @property
    def should_reply(self) -> bool:
        return self.mentioned and not self.is_self


# --------------------------------------------------------------------------- #
# Turn states                                                                  #
# --------------------------------------------------------------------------- #


class ErrorKind(Enum):
    IDENTITY = "identity"
    ACKNOWLEDGMENT = "acknowledgment"
    CONTEXT_OR_GENERATION = "context_or_generation"
    REPLY_POST = "reply_post"
    WELCOME = "welcome"


@dataclass(frozen=True)
class Filtered:
    reason: str
    terminal = True


@dataclass(frozen=True)
class Acknowledging:
    turn: Turn
    bot_login: str
    query: str = ""
    terminal = False


@dataclass(frozen=True)
class Answering:
    turn: Turn
    bot_login: str
    query: str = ""
    help: bool = False
    terminal = False


@dataclass(frozen=True)
class Replied:
    target: ReplyTarget
    text: str
    terminal = True


@dataclass(frozen=True)
class Failed:
    kind: ErrorKind
    error: str
    target: ReplyTarget | None = None
    # True when an apology comment was posted for this failure.
    notified: bool = False
    terminal = True


TurnState = Union[Filtered, Acknowledging, Answering, Replied, Failed]
