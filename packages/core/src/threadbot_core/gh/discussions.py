"""GitHub Discussions helpers.

Discussions have no REST endpoint for replies, so posting goes through the
GraphQL API using PyGithub's requester. Discussions are addressed by their
global node id (``discussion.node_id`` in webhook payloads).
"""

from __future__ import annotations

import logging

from github import GithubException

logger = logging.getLogger(__name__)

ADD_DISCUSSION_COMMENT = """
mutation($discussionId: ID!, $body: String!) {
  addDiscussionComment(input: {discussionId: $discussionId, body: $body}) {
    comment {
      id
      url
    }
  }
}
"""


def post_discussion_comment(gh, discussion_node_id: str, body: str) -> str | None:
    """Reply to a discussion and return the new comment's URL.

    Raises GithubException on HTTP errors and on GraphQL-level errors.
    """
    _, data = gh.requester.graphql_query(ADD_DISCUSSION_COMMENT, {"discussionId": discussion_node_id, "body": body})
    if data.get("errors"):
        raise GithubException(422, data, None)
    comment = (((data.get("data") or {}).get("addDiscussionComment") or {}).get("comment")) or {}
    logger.debug("Posted discussion comment %s", comment.get("url"))
    return comment.get("url")
