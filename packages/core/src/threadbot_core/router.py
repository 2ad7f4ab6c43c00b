"""Webhook event routing.

Each supported ``(event, action)`` pair maps to exactly one handler flow.
The router is also the per-turn isolation boundary: nothing raised while
handling one delivery escapes to the webhook dispatcher, so a failing turn
never triggers a redelivery or disturbs other turns.
"""

from __future__ import annotations

import logging

from threadbot_core.models import ErrorKind, EventKind, Failed, ReplyTarget, Turn, TurnState

logger = logging.getLogger(__name__)


def _repo_coordinates(payload: dict) -> tuple[str, str]:
    repository = payload["repository"]
    return repository["owner"]["login"], repository["name"]


def _discussion_turn(kind: EventKind, payload: dict, actor: str, comment: str = "") -> Turn:
    owner, repo = _repo_coordinates(payload)
    discussion = payload["discussion"]
    return Turn(
        kind=kind,
        owner=owner,
        repo=repo,
        actor=actor,
        target=ReplyTarget.discussion(discussion["node_id"]),
        number=discussion.get("number"),
        title=discussion.get("title") or "",
        body=discussion.get("body") or "",
        comment=comment,
    )


def build_turn(kind: EventKind, payload: dict) -> Turn:
    """Build a Turn from a webhook payload. Raises KeyError/TypeError on malformed payloads."""
    if kind is EventKind.DISCUSSION_CREATED:
        return _discussion_turn(kind, payload, actor=payload["discussion"]["user"]["login"])

    if kind is EventKind.DISCUSSION_COMMENT_CREATED:
        comment = payload["comment"]
        return _discussion_turn(kind, payload, actor=comment["user"]["login"], comment=comment.get("body") or "")

    if kind is EventKind.PR_OPENED:
        owner, repo = _repo_coordinates(payload)
        pull_request = payload["pull_request"]
        number = pull_request["number"]
        return Turn(
            kind=kind,
            owner=owner,
            repo=repo,
            actor=pull_request["user"]["login"],
            target=ReplyTarget.issue(owner, repo, number),
            number=number,
            title=pull_request.get("title") or "",
            body=pull_request.get("body") or "",
        )

    raise TypeError(f"Unsupported event kind: {kind!r}")


class EventRouter:
    def __init__(self, orchestrator):
        self.orchestrator = orchestrator

    @staticmethod
    def supports(event: str, payload: dict) -> bool:
        return EventKind.from_delivery(event, payload.get("action")) is not None

    def dispatch(self, event: str, payload: dict) -> TurnState | None:
        """Handle one delivery. Returns the terminal state, or None if the event was ignored."""
        kind = EventKind.from_delivery(event, payload.get("action"))
        if kind is None:
            logger.debug("Ignoring %s.%s event", event, payload.get("action"))
            return None

        try:
            turn = build_turn(kind, payload)
        except (KeyError, TypeError) as e:
            logger.error("Malformed %s.%s payload: missing %s", kind.event, kind.action, e)
            return None

        try:
            return self.orchestrator.handle(turn)
        except Exception as e:
            logger.exception("Unhandled error while handling %s.%s for %s", kind.event, kind.action, turn.thread)
            return Failed(ErrorKind.REPLY_POST, str(e), turn.target)
