"""One posting contract over GitHub's two comment surfaces."""

from __future__ import annotations

import logging

from threadbot_core.gh.discussions import post_discussion_comment
from threadbot_core.gh.issues import post_issue_comment
from threadbot_core.models import ReplyTarget, ThreadKind

logger = logging.getLogger(__name__)


class ReplyGateway:
    """Posts a comment to a ReplyTarget.

    Errors propagate to the caller; nothing is retried or swallowed here.
    """

    def __init__(self, gh):
        self.gh = gh

    def post(self, target: ReplyTarget, text: str) -> None:
        if target.kind is ThreadKind.DISCUSSION:
            post_discussion_comment(self.gh, target.node_id, text)
        elif target.kind is ThreadKind.ISSUE:
            post_issue_comment(self.gh, target.owner, target.repo, target.number, text)
        else:
            raise TypeError(f"Unsupported reply target kind: {target.kind!r}")
        logger.info("Posted reply to %s", target)
