"""Tests for the reply gateway and the GitHub helpers behind it."""

from unittest.mock import MagicMock

import pytest
from github import GithubException

from threadbot_core.gateway import ReplyGateway
from threadbot_core.gh.discussions import ADD_DISCUSSION_COMMENT, post_discussion_comment
from threadbot_core.gh.issues import GithubCollaborator, is_first_contribution, post_issue_comment
from threadbot_core.models import ReplyTarget

MUTATION_RESPONSE = {"data": {"addDiscussionComment": {"comment": {"id": "DC_1", "url": "https://github.com/x"}}}}


def _gh():
    gh = MagicMock()
    gh.requester.graphql_query.return_value = ({}, MUTATION_RESPONSE)
    return gh


class TestReplyGateway:
    def test_discussion_target_uses_graphql(self):
        gh = _gh()
        ReplyGateway(gh).post(ReplyTarget.discussion("D_1"), "hello")
        gh.requester.graphql_query.assert_called_once_with(
            ADD_DISCUSSION_COMMENT, {"discussionId": "D_1", "body": "hello"}
        )
        gh.get_repo.assert_not_called()

    def test_issue_target_uses_rest(self):
        gh = _gh()
        ReplyGateway(gh).post(ReplyTarget.issue("octo", "cache", 42), "welcome")
        gh.get_repo.assert_called_once_with("octo/cache")
        gh.get_repo.return_value.get_issue.assert_called_once_with(42)
        gh.get_repo.return_value.get_issue.return_value.create_comment.assert_called_once_with("welcome")
        gh.requester.graphql_query.assert_not_called()

    def test_errors_propagate(self):
        gh = _gh()
        gh.requester.graphql_query.side_effect = GithubException(502, {"message": "Bad Gateway"}, None)
        with pytest.raises(GithubException):
            ReplyGateway(gh).post(ReplyTarget.discussion("D_1"), "hello")
        assert gh.requester.graphql_query.call_count == 1


class TestPostDiscussionComment:
    def test_returns_comment_url(self):
        assert post_discussion_comment(_gh(), "D_1", "hi") == "https://github.com/x"

    def test_graphql_errors_raise(self):
        gh = MagicMock()
        gh.requester.graphql_query.return_value = ({}, {"errors": [{"message": "Could not resolve to a node"}]})
        with pytest.raises(GithubException):
            post_discussion_comment(gh, "D_missing", "hi")


class TestPostIssueComment:
    def test_returns_comment_url(self):
        gh = MagicMock()
        gh.get_repo.return_value.get_issue.return_value.create_comment.return_value.html_url = "https://c"
        assert post_issue_comment(gh, "octo", "cache", 1, "hi") == "https://c"


class TestIsFirstContribution:
    @staticmethod
    def _gh(*numbers):
        gh = MagicMock()
        gh.search_issues.return_value = [MagicMock(number=n) for n in numbers]
        return gh

    def test_no_pull_requests_indexed_yet(self):
        gh = self._gh()
        assert is_first_contribution(gh, "octo", "cache", "bob", exclude_number=42) is True
        gh.search_issues.assert_called_once_with("repo:octo/cache is:pr author:bob")

    def test_only_the_current_pull_request_indexed(self):
        assert is_first_contribution(self._gh(42), "octo", "cache", "bob", exclude_number=42) is True

    def test_earlier_pull_request_while_current_not_indexed(self):
        assert is_first_contribution(self._gh(3), "octo", "cache", "bob", exclude_number=42) is False

    def test_earlier_and_current_pull_requests_indexed(self):
        assert is_first_contribution(self._gh(42, 3), "octo", "cache", "bob", exclude_number=42) is False

    def test_without_exclusion_any_pull_request_counts(self):
        assert is_first_contribution(self._gh(3), "octo", "cache", "bob") is False

    def test_collaborator_binds_client_and_forwards_number(self):
        gh = self._gh(42)
        assert GithubCollaborator(gh).is_first_contribution("octo", "cache", "bob", 42) is True
        assert GithubCollaborator(self._gh(3)).is_first_contribution("octo", "cache", "bob", 42) is False
