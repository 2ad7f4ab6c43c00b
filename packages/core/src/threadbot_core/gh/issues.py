"""Issue and pull request helpers (REST).

Pull requests are issues in the REST API: conversation comments on a PR are
posted through the issue comments endpoint.
"""

from __future__ import annotations

import logging

from threadbot_core.gh.client import get_repo

logger = logging.getLogger(__name__)


def post_issue_comment(gh, owner: str, repo: str, number: int, body: str) -> str:
    """Post a comment on an issue or pull request and return its URL."""
    issue = get_repo(gh, owner, repo).get_issue(number)
    comment = issue.create_comment(body)
    logger.debug("Posted issue comment %s", comment.html_url)
    return comment.html_url


def is_first_contribution(gh, owner: str, repo: str, login: str, exclude_number: int | None = None) -> bool:
    """Return True if ``login`` has opened no pull request in the repo other than ``exclude_number``.

    Search is eventually consistent: the pull request that triggered the event
    may or may not be indexed yet, so it is skipped by number rather than
    counted.
    """
    results = gh.search_issues(f"repo:{owner}/{repo} is:pr author:{login}")
    for issue in results:
        if issue.number != exclude_number:
            logger.debug("@%s already opened %s/%s#%s", login, owner, repo, issue.number)
            return False
    return True


class GithubCollaborator:
    """Binds the module-level helpers to one client for injection into the orchestrator."""

    def __init__(self, gh):
        self.gh = gh

    def is_first_contribution(self, owner: str, repo: str, login: str, exclude_number: int | None = None) -> bool:
        return is_first_contribution(self.gh, owner, repo, login, exclude_number)
