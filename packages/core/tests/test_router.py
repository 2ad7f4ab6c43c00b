"""Tests for webhook event routing and per-turn isolation."""

from unittest.mock import MagicMock

import pytest

from threadbot_core.models import ErrorKind, EventKind, Failed, Replied, ReplyTarget, ThreadKind
from threadbot_core.router import EventRouter, build_turn

REPOSITORY = {"name": "cache", "owner": {"login": "octo"}}

DISCUSSION = {
    "node_id": "D_kwDOabc123",
    "number": 7,
    "title": "How does caching work?",
    "body": "I'm confused.",
    "user": {"login": "alice"},
}


def discussion_payload(**overrides):
    return {"action": "created", "repository": REPOSITORY, "discussion": {**DISCUSSION, **overrides}}


def comment_payload(body="@bot what about eviction?", login="carol"):
    return {
        "action": "created",
        "repository": REPOSITORY,
        "discussion": DISCUSSION,
        "comment": {"body": body, "user": {"login": login}},
    }


def pr_payload(action="opened"):
    return {
        "action": action,
        "repository": REPOSITORY,
        "pull_request": {"number": 42, "title": "Fix typo", "body": None, "user": {"login": "bob"}},
    }


class TestBuildTurn:
    def test_discussion_created(self):
        turn = build_turn(EventKind.DISCUSSION_CREATED, discussion_payload())
        assert turn.owner == "octo"
        assert turn.repo == "cache"
        assert turn.actor == "alice"
        assert turn.target == ReplyTarget.discussion("D_kwDOabc123")
        assert turn.title == "How does caching work?"
        assert turn.body == "I'm confused."
        assert turn.thread == "octo/cache#7"

    def test_discussion_with_null_body(self):
        turn = build_turn(EventKind.DISCUSSION_CREATED, discussion_payload(body=None))
        assert turn.body == ""

    def test_discussion_comment_uses_commenter_as_actor(self):
        turn = build_turn(EventKind.DISCUSSION_COMMENT_CREATED, comment_payload())
        assert turn.actor == "carol"
        assert turn.comment == "@bot what about eviction?"
        assert turn.title == "How does caching work?"
        assert turn.target.kind is ThreadKind.DISCUSSION

    def test_pull_request_targets_issue_thread(self):
        turn = build_turn(EventKind.PR_OPENED, pr_payload())
        assert turn.actor == "bob"
        assert turn.target == ReplyTarget.issue("octo", "cache", 42)
        assert turn.body == ""

    def test_malformed_payload_raises(self):
        with pytest.raises(KeyError):
            build_turn(EventKind.PR_OPENED, {"action": "opened", "repository": REPOSITORY})


class TestDispatch:
    @pytest.mark.parametrize(
        "event,payload,kind",
        [
            ("discussion", discussion_payload(), EventKind.DISCUSSION_CREATED),
            ("discussion_comment", comment_payload(), EventKind.DISCUSSION_COMMENT_CREATED),
            ("pull_request", pr_payload(), EventKind.PR_OPENED),
        ],
    )
    def test_routes_supported_events_to_one_handler(self, event, payload, kind):
        orchestrator = MagicMock()
        EventRouter(orchestrator).dispatch(event, payload)
        orchestrator.handle.assert_called_once()
        assert orchestrator.handle.call_args.args[0].kind is kind

    @pytest.mark.parametrize(
        "event,payload",
        [
            ("pull_request", pr_payload(action="closed")),
            ("discussion", {**discussion_payload(), "action": "edited"}),
            ("issues", {"action": "opened"}),
            ("push", {}),
        ],
    )
    def test_ignores_unsupported_events(self, event, payload):
        orchestrator = MagicMock()
        assert EventRouter(orchestrator).dispatch(event, payload) is None
        orchestrator.handle.assert_not_called()

    def test_returns_handler_state(self):
        orchestrator = MagicMock()
        replied = Replied(ReplyTarget.discussion("D_1"), "answer")
        orchestrator.handle.return_value = replied
        assert EventRouter(orchestrator).dispatch("discussion", discussion_payload()) is replied

    def test_handler_exception_does_not_escape(self):
        orchestrator = MagicMock()
        orchestrator.handle.side_effect = RuntimeError("post failed")
        state = EventRouter(orchestrator).dispatch("discussion", discussion_payload())
        assert isinstance(state, Failed)
        assert state.kind is ErrorKind.REPLY_POST

    def test_malformed_payload_is_ignored(self):
        orchestrator = MagicMock()
        payload = {"action": "created", "repository": REPOSITORY}
        assert EventRouter(orchestrator).dispatch("discussion", payload) is None
        orchestrator.handle.assert_not_called()

    def test_supports(self):
        assert EventRouter.supports("discussion", {"action": "created"})
        assert not EventRouter.supports("discussion", {"action": "deleted"})
